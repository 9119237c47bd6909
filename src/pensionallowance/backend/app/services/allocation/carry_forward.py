"""Attribute excess contributions to unused allowance from earlier years.

Years are processed in ascending order. A year whose contributions exceed its
own allowance draws the excess from up to ``window`` preceding years, always
exhausting the nearest year before consulting an older one. Each year only
reads breakdowns that were finalised before it, so unused allowance is never
claimed twice.
"""

from __future__ import annotations

from collections.abc import Sequence

from .records import AllocationBreakdown, CarryForwardClaim, TaxYearRecord

DEFAULT_CARRY_FORWARD_YEARS = 3


def _already_claimed(
    source_index: int,
    current_index: int,
    records: Sequence[TaxYearRecord],
    finalised: Sequence[AllocationBreakdown],
) -> float:
    """Return allowance from ``source_index`` claimed by years before ``current_index``."""

    source_year = records[source_index].year_start
    claimed = 0.0
    for breakdown in finalised[source_index + 1 : current_index]:
        for claim in breakdown.carry_forward:
            if claim.from_year == source_year:
                claimed += claim.amount
    return claimed


def allocate_year(
    index: int,
    records: Sequence[TaxYearRecord],
    finalised: Sequence[AllocationBreakdown],
    *,
    window: int = DEFAULT_CARRY_FORWARD_YEARS,
) -> AllocationBreakdown:
    """Compute the breakdown for ``records[index]`` given earlier breakdowns."""

    record = records[index]
    current_year_portion = min(record.used, record.allowance)
    excess = max(0.0, record.used - record.allowance)

    claims: list[CarryForwardClaim] = []
    for offset in range(1, window + 1):
        if excess <= 0:
            break
        source_index = index - offset
        if source_index < 0:
            break

        source = records[source_index]
        unused = source.allowance - source.used
        claimed = _already_claimed(source_index, index, records, finalised)
        available = max(0.0, unused - claimed)
        amount = min(excess, available)
        if amount > 0:
            claims.append(CarryForwardClaim(from_year=source.year_start, amount=amount))
            excess -= amount

    # Whatever excess remains falls outside the window and is not recorded.
    return AllocationBreakdown(
        current_year_portion=current_year_portion,
        carry_forward=tuple(claims),
    )


def allocate(
    records: Sequence[TaxYearRecord],
    *,
    window: int = DEFAULT_CARRY_FORWARD_YEARS,
) -> list[AllocationBreakdown]:
    """Return one :class:`AllocationBreakdown` per record, in the same order."""

    breakdowns: list[AllocationBreakdown] = []
    for index in range(len(records)):
        breakdowns.append(allocate_year(index, records, breakdowns, window=window))
    return breakdowns


__all__ = ["DEFAULT_CARRY_FORWARD_YEARS", "allocate", "allocate_year"]
