"""Track how much of each year's unused allowance later years have claimed."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .records import AllocationBreakdown, ConsumerClaim, TaxYearRecord


def consumed_by_future(
    index: int,
    records: Sequence[TaxYearRecord],
    breakdowns: Sequence[AllocationBreakdown],
) -> float:
    """Sum the carry-forward claims made against ``records[index]`` by later years."""

    year_start = records[index].year_start
    total = 0.0
    for breakdown in breakdowns[index + 1 :]:
        for claim in breakdown.carry_forward:
            if claim.from_year == year_start:
                total += claim.amount
    return total


@dataclass(frozen=True)
class ConsumptionIndex:
    """Consumed-by-future totals evaluated once per ledger build."""

    totals: tuple[float, ...]
    claims: tuple[tuple[ConsumerClaim, ...], ...]

    @classmethod
    def build(
        cls,
        records: Sequence[TaxYearRecord],
        breakdowns: Sequence[AllocationBreakdown],
    ) -> ConsumptionIndex:
        if len(records) != len(breakdowns):
            raise ValueError("Records and breakdowns must be aligned")

        totals = tuple(
            consumed_by_future(index, records, breakdowns) for index in range(len(records))
        )

        consumers: list[list[ConsumerClaim]] = [[] for _ in records]
        positions = {record.year_start: index for index, record in enumerate(records)}
        for record, breakdown in zip(records, breakdowns):
            for claim in breakdown.carry_forward:
                source_index = positions.get(claim.from_year)
                if source_index is None:
                    continue
                consumers[source_index].append(
                    ConsumerClaim(used_by_year=record.year_start, amount=claim.amount)
                )

        return cls(totals=totals, claims=tuple(tuple(entries) for entries in consumers))

    def __len__(self) -> int:
        return len(self.totals)

    def consumed(self, index: int) -> float:
        """Return how much of year ``index``'s unused allowance later years used."""

        return self.totals[index]

    def consumers(self, index: int) -> tuple[ConsumerClaim, ...]:
        """Return the later years that drew on year ``index``, in year order."""

        return self.claims[index]


__all__ = ["ConsumptionIndex", "consumed_by_future"]
