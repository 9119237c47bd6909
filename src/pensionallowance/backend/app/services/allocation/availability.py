"""Classify unused allowance as available or lost and total it up.

Classification is relative to the latest year in the series. That is a
different reference point from the allocator, whose lookback is relative to the
year making the claim.
"""

from __future__ import annotations

from collections.abc import Sequence

from .carry_forward import DEFAULT_CARRY_FORWARD_YEARS
from .consumption import ConsumptionIndex
from .records import LedgerSummary, TaxYearRecord, YearPosition


def remaining(index: int, records: Sequence[TaxYearRecord], consumption: ConsumptionIndex) -> float:
    """Unused allowance of ``records[index]`` that no later year has claimed."""

    record = records[index]
    return max(0.0, record.allowance - record.used - consumption.consumed(index))


def is_lost(index: int, latest_index: int, *, window: int = DEFAULT_CARRY_FORWARD_YEARS) -> bool:
    """Return ``True`` when year ``index`` is older than the carry-forward window."""

    return (latest_index - index) > window


def year_positions(
    records: Sequence[TaxYearRecord],
    consumption: ConsumptionIndex,
    *,
    window: int = DEFAULT_CARRY_FORWARD_YEARS,
) -> list[YearPosition]:
    latest_index = len(records) - 1
    return [
        YearPosition(
            remaining=remaining(index, records, consumption),
            is_lost=is_lost(index, latest_index, window=window),
            is_current=index == latest_index,
        )
        for index in range(len(records))
    ]


def summarise(
    records: Sequence[TaxYearRecord],
    consumption: ConsumptionIndex,
    *,
    window: int = DEFAULT_CARRY_FORWARD_YEARS,
) -> LedgerSummary:
    """Return the four ledger totals for ``records``."""

    if not records:
        return LedgerSummary()

    latest_index = len(records) - 1

    total_available = 0.0
    for offset in range(0, window + 1):
        index = latest_index - offset
        if index < 0:
            break
        total_available += remaining(index, records, consumption)

    total_lost = sum(
        remaining(index, records, consumption)
        for index in range(len(records))
        if is_lost(index, latest_index, window=window)
    )

    return LedgerSummary(
        total_contributed=sum(record.used for record in records),
        total_allowance_granted=sum(record.allowance for record in records),
        total_available=total_available,
        total_lost=float(total_lost),
    )


__all__ = ["is_lost", "remaining", "summarise", "year_positions"]
