"""Pydantic models describing the public API surface."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "CarryForwardEntry",
    "ConsumerEntry",
    "LedgerRequest",
    "LedgerResponse",
    "LedgerSummaryPayload",
    "ResponseMeta",
    "SegmentEntry",
    "ViewPayload",
    "YearEntry",
    "format_validation_error",
]


class LedgerRequest(BaseModel):
    """Contribution totals keyed by tax year, plus an optional drill-down target."""

    model_config = ConfigDict(extra="forbid")

    contributions: dict[Any, Any] = Field(default_factory=dict)
    selected_year: int | str | None = None

    @field_validator("contributions", mode="before")
    @classmethod
    def _default_missing_contributions(cls, value: Any) -> Any:
        if value is None:
            return {}
        return value

    @field_validator("selected_year", mode="before")
    @classmethod
    def _reject_boolean_year(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("selected_year must be a tax year label or start year")
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CarryForwardEntry(BaseModel):
    """Unused allowance a year drew from an earlier year."""

    model_config = ConfigDict(extra="forbid")

    from_year: int
    from_label: str
    amount: float


class ConsumerEntry(BaseModel):
    """A later year that drew on this year's unused allowance."""

    model_config = ConfigDict(extra="forbid")

    used_by_year: int
    used_by_label: str
    amount: float


class YearEntry(BaseModel):
    """Per-year record exposed to the presentation layer."""

    model_config = ConfigDict(extra="forbid")

    year_start: int
    label: str
    allowance: float
    used: float
    current_year_portion: float
    carry_forward: list[CarryForwardEntry]
    consumed_by_future: float
    consumed_by: list[ConsumerEntry]
    remaining: float
    status: Literal["current", "available", "lost"]


class LedgerSummaryPayload(BaseModel):
    """Aggregate totals across the series."""

    model_config = ConfigDict(extra="forbid")

    total_contributed: float
    total_allowance_granted: float
    total_available: float
    total_lost: float


class SegmentEntry(BaseModel):
    """Bar segments for one year under the requested view."""

    model_config = ConfigDict(extra="forbid")

    index: int
    label: str
    role: Literal["overview", "selected", "source", "window", "hidden"]
    amount: float
    current_year: float
    carry_forward: float
    unused: float
    unused_kind: Literal["unused", "lost"]


class ViewPayload(BaseModel):
    """Drill-down view derived from an already-built ledger."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["overview", "drilldown"]
    year_index: int | None = None
    segments: list[SegmentEntry]


class ResponseMeta(BaseModel):
    """Metadata returned alongside the ledger output."""

    model_config = ConfigDict(extra="forbid")

    carry_forward_years: int
    latest_year: str | None = None
    ignored_keys: list[str] | None = None


class LedgerResponse(BaseModel):
    """Full response payload produced by the ledger service."""

    model_config = ConfigDict(extra="forbid")

    years: list[YearEntry]
    summary: LedgerSummaryPayload
    meta: ResponseMeta
    view: ViewPayload | None = None


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid ledger payload: {details}"
