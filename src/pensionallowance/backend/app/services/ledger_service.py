"""Build the allowance ledger and serialise it for the presentation layer.

``build_ledger`` runs the allocation pipeline exactly once per input mapping:
year normalisation, carry-forward allocation, the consumption index and the
availability totals. ``calculate_ledger`` wraps it with request validation and
produces the JSON-ready payload returned by the HTTP API. Every per-year and
summary figure in that payload is read from the same :class:`Ledger`, so the
presentation layer never has to recompute anything.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from pensionallowance.backend.app.models import (
    LedgerRequest,
    LedgerResponse,
    format_validation_error,
)
from pensionallowance.backend.config.allowance_config import (
    AllowanceScheduleConfig,
    load_allowance_schedule,
)

from .allocation import (
    ConsumptionIndex,
    Drilldown,
    InvalidLedgerInput,
    Ledger,
    Overview,
    ViewState,
    allocate,
    drilldown_segments,
    drilldown_state,
    normalize,
    parse_year_key,
    summarise,
    year_positions,
)

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when ledger profiling should be captured."""

    flag = os.getenv("PENSIONALLOWANCE_PROFILE_LEDGER", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def build_ledger(
    raw_totals: Mapping[Any, Any] | None,
    *,
    schedule: AllowanceScheduleConfig | None = None,
) -> Ledger:
    """Run the allocation pipeline for ``raw_totals`` and return the snapshot."""

    config = schedule or load_allowance_schedule()
    window = config.carry_forward_years

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    dropped: list[str] = []
    with _profile_section("normalize", timings):
        records = normalize(raw_totals, allowance_lookup=config.allowance_for, dropped=dropped)

    with _profile_section("allocate", timings):
        breakdowns = allocate(records, window=window)

    with _profile_section("consumption", timings):
        consumption = ConsumptionIndex.build(records, breakdowns)

    with _profile_section("availability", timings):
        positions = year_positions(records, consumption, window=window)
        summary = summarise(records, consumption, window=window)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "build_ledger timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return Ledger(
        records=tuple(records),
        breakdowns=tuple(breakdowns),
        consumption=consumption,
        positions=tuple(positions),
        summary=summary,
        window=window,
        dropped_keys=tuple(dropped),
    )


def _year_status(ledger: Ledger, index: int) -> str:
    position = ledger.positions[index]
    if position.is_current:
        return "current"
    if position.is_lost:
        return "lost"
    return "available"


def serialise_years(ledger: Ledger) -> list[dict[str, Any]]:
    """Return the per-year records of ``ledger`` as JSON-ready mappings."""

    years: list[dict[str, Any]] = []
    for index, (record, breakdown) in enumerate(zip(ledger.records, ledger.breakdowns)):
        years.append(
            {
                "year_start": record.year_start,
                "label": record.label,
                "allowance": record.allowance,
                "used": record.used,
                "current_year_portion": breakdown.current_year_portion,
                "carry_forward": [
                    {
                        "from_year": claim.from_year,
                        "from_label": claim.from_label,
                        "amount": claim.amount,
                    }
                    for claim in breakdown.carry_forward
                ],
                "consumed_by_future": ledger.consumption.consumed(index),
                "consumed_by": [
                    {
                        "used_by_year": consumer.used_by_year,
                        "used_by_label": consumer.used_by_label,
                        "amount": consumer.amount,
                    }
                    for consumer in ledger.consumption.consumers(index)
                ],
                "remaining": ledger.positions[index].remaining,
                "status": _year_status(ledger, index),
            }
        )
    return years


def serialise_view(ledger: Ledger, state: ViewState) -> dict[str, Any]:
    """Return the drill-down segments for ``state`` as a JSON-ready mapping."""

    segments = drilldown_segments(ledger, state)
    return {
        "kind": state.kind,
        "year_index": state.year_index if isinstance(state, Drilldown) else None,
        "segments": [
            {
                "index": segment.index,
                "label": segment.label,
                "role": segment.role,
                "amount": segment.amount,
                "current_year": segment.current_year,
                "carry_forward": segment.carry_forward,
                "unused": segment.unused,
                "unused_kind": segment.unused_kind,
            }
            for segment in segments
        ],
    }


def resolve_view_state(ledger: Ledger, selected_year: int | str | None) -> ViewState:
    """Translate a requested year into the view state it leads to."""

    if selected_year is None:
        return Overview()

    year = parse_year_key(selected_year)
    if year is None:
        raise InvalidLedgerInput(
            f"Unrecognised tax year: {selected_year!r}",
            field="selected_year",
            value=selected_year,
        )

    try:
        index = ledger.index_of(year)
    except KeyError as exc:
        raise InvalidLedgerInput(
            f"Tax year {selected_year!r} is not present in the contributions",
            field="selected_year",
            value=selected_year,
        ) from exc

    return drilldown_state(ledger, index)


def calculate_ledger(payload: Mapping[str, Any] | LedgerRequest) -> dict[str, Any]:
    """Validate ``payload``, build the ledger and return the response payload."""

    if isinstance(payload, LedgerRequest):
        request_model = payload
    else:
        if not isinstance(payload, Mapping):
            raise InvalidLedgerInput("Payload must be a mapping")
        try:
            request_model = LedgerRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidLedgerInput(format_validation_error(exc)) from exc

    ledger = build_ledger(request_model.contributions)
    summary = ledger.summary

    meta: dict[str, Any] = {
        "carry_forward_years": ledger.window,
        "latest_year": ledger.records[-1].label if ledger.records else None,
    }
    if ledger.dropped_keys:
        meta["ignored_keys"] = list(ledger.dropped_keys)

    response: dict[str, Any] = {
        "years": serialise_years(ledger),
        "summary": {
            "total_contributed": summary.total_contributed,
            "total_allowance_granted": summary.total_allowance_granted,
            "total_available": summary.total_available,
            "total_lost": summary.total_lost,
        },
        "meta": meta,
    }

    if request_model.selected_year is not None:
        state = resolve_view_state(ledger, request_model.selected_year)
        response["view"] = serialise_view(ledger, state)

    response_model = LedgerResponse.model_validate(response)
    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = [
    "build_ledger",
    "calculate_ledger",
    "resolve_view_state",
    "serialise_view",
    "serialise_years",
]
