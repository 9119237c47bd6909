"""Immutable records produced by the allowance ledger pipeline.

Each stage of the pipeline returns frozen dataclasses so the presentation layer
can read but never mutate them. A fresh set of records is produced whenever
the input contributions change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .calendar import format_tax_year

if TYPE_CHECKING:  # pragma: no cover - only for static type checkers
    from .consumption import ConsumptionIndex


class InvalidLedgerInput(ValueError):
    """Raised when the ledger input is not a tax year to amount mapping.

    ``field`` names the request member at fault and ``value`` echoes what was
    supplied for it, when either is known.
    """

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


@dataclass(frozen=True)
class TaxYearRecord:
    """Contributions and statutory allowance for a single tax year."""

    year_start: int
    label: str
    allowance: float
    used: float


@dataclass(frozen=True)
class CarryForwardClaim:
    """Unused allowance drawn from an earlier year."""

    from_year: int
    amount: float

    @property
    def from_label(self) -> str:
        return format_tax_year(self.from_year)


@dataclass(frozen=True)
class AllocationBreakdown:
    """How a year's contributions were attributed to allowance."""

    current_year_portion: float
    carry_forward: tuple[CarryForwardClaim, ...] = ()

    @property
    def carry_forward_total(self) -> float:
        return sum(claim.amount for claim in self.carry_forward)


@dataclass(frozen=True)
class ConsumerClaim:
    """A later year that consumed some of an earlier year's unused allowance."""

    used_by_year: int
    amount: float

    @property
    def used_by_label(self) -> str:
        return format_tax_year(self.used_by_year)


@dataclass(frozen=True)
class LedgerSummary:
    """Aggregate totals for the whole series."""

    total_contributed: float = 0.0
    total_allowance_granted: float = 0.0
    total_available: float = 0.0
    total_lost: float = 0.0


@dataclass(frozen=True)
class YearPosition:
    """Availability classification for one year relative to the latest year."""

    remaining: float
    is_lost: bool
    is_current: bool


@dataclass(frozen=True)
class Ledger:
    """Snapshot bundling every derived view of one input mapping."""

    records: tuple[TaxYearRecord, ...]
    breakdowns: tuple[AllocationBreakdown, ...]
    consumption: "ConsumptionIndex"
    positions: tuple[YearPosition, ...]
    summary: LedgerSummary
    window: int = 3
    dropped_keys: tuple[str, ...] = ()

    @property
    def latest_index(self) -> int:
        return len(self.records) - 1

    def index_of(self, year_start: int) -> int:
        for index, record in enumerate(self.records):
            if record.year_start == year_start:
                return index
        raise KeyError(year_start)


__all__ = [
    "AllocationBreakdown",
    "CarryForwardClaim",
    "ConsumerClaim",
    "InvalidLedgerInput",
    "Ledger",
    "LedgerSummary",
    "TaxYearRecord",
    "YearPosition",
]
