"""Pure queries backing the overview and drill-down views of a ledger.

The view state itself belongs to the presentation layer. These helpers only
read an already-built :class:`Ledger` and never re-run the allocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from .records import Ledger

SegmentRole = Literal["overview", "selected", "source", "window", "hidden"]
UnusedKind = Literal["unused", "lost"]


@dataclass(frozen=True)
class Overview:
    """Every year is shown with its full breakdown."""

    kind: Literal["overview"] = "overview"


@dataclass(frozen=True)
class Drilldown:
    """Focus on the carry-forward sources of a single year."""

    year_index: int
    kind: Literal["drilldown"] = "drilldown"


ViewState = Union[Overview, Drilldown]


@dataclass(frozen=True)
class YearSegments:
    """Bar segments for one year under a given view state."""

    index: int
    label: str
    role: SegmentRole
    amount: float = 0.0
    current_year: float = 0.0
    carry_forward: float = 0.0
    unused: float = 0.0
    unused_kind: UnusedKind = "unused"


def drilldown_state(ledger: Ledger, year_index: int) -> ViewState:
    """Return the view state reached by selecting ``year_index``.

    Only years that drew on carry forward can be expanded; anything else keeps
    the overview.
    """

    if not 0 <= year_index < len(ledger.records):
        raise IndexError(year_index)
    if not ledger.breakdowns[year_index].carry_forward:
        return Overview()
    return Drilldown(year_index=year_index)


def _unused_kind(ledger: Ledger, index: int) -> UnusedKind:
    return "lost" if ledger.positions[index].is_lost else "unused"


def _overview_segments(ledger: Ledger) -> list[YearSegments]:
    segments: list[YearSegments] = []
    for index, (record, breakdown) in enumerate(zip(ledger.records, ledger.breakdowns)):
        segments.append(
            YearSegments(
                index=index,
                label=record.label,
                role="overview",
                amount=record.used,
                current_year=breakdown.current_year_portion,
                carry_forward=breakdown.carry_forward_total,
                unused=ledger.positions[index].remaining,
                unused_kind=_unused_kind(ledger, index),
            )
        )
    return segments


def _drilldown_segments(ledger: Ledger, selected: int) -> list[YearSegments]:
    claims = {
        claim.from_year: claim.amount for claim in ledger.breakdowns[selected].carry_forward
    }

    segments: list[YearSegments] = []
    for index, record in enumerate(ledger.records):
        if index == selected:
            portion = ledger.breakdowns[index].current_year_portion
            segments.append(
                YearSegments(
                    index=index,
                    label=record.label,
                    role="selected",
                    amount=portion,
                    current_year=portion,
                )
            )
            continue

        remaining = ledger.positions[index].remaining
        claimed = claims.get(record.year_start)
        if claimed is not None:
            segments.append(
                YearSegments(
                    index=index,
                    label=record.label,
                    role="source",
                    amount=claimed,
                    carry_forward=claimed,
                    unused=remaining,
                    unused_kind=_unused_kind(ledger, index),
                )
            )
        elif 0 < selected - index <= ledger.window:
            segments.append(
                YearSegments(
                    index=index,
                    label=record.label,
                    role="window",
                    unused=remaining,
                    unused_kind=_unused_kind(ledger, index),
                )
            )
        else:
            segments.append(YearSegments(index=index, label=record.label, role="hidden"))

    return segments


def drilldown_segments(ledger: Ledger, state: ViewState) -> list[YearSegments]:
    """Return the per-year segments to display for ``state``."""

    if isinstance(state, Drilldown):
        return _drilldown_segments(ledger, state.year_index)
    return _overview_segments(ledger)


__all__ = [
    "Drilldown",
    "Overview",
    "ViewState",
    "YearSegments",
    "drilldown_segments",
    "drilldown_state",
]
