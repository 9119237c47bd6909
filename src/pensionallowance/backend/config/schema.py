"""Pydantic models describing the annual allowance schedule."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


# Tax years accepted by both the contribution parser and the schedule validator.
MIN_TAX_YEAR = 1901
MAX_TAX_YEAR = 2100


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class AllowanceBreakpoint(ImmutableModel):
    """Allowance that applies from ``from_year`` until the next breakpoint."""

    from_year: int
    allowance: float
    notes_url: str | None = None

    @model_validator(mode="after")
    def _validate_values(self) -> Self:
        if self.allowance <= 0:
            raise ConfigurationError("Allowance amounts must be positive")
        return self


class AllowanceScheduleConfig(ImmutableModel):
    """Statutory annual allowance table plus the carry-forward window."""

    default_allowance: float
    carry_forward_years: int = 3
    breakpoints: Sequence[AllowanceBreakpoint] = Field(default_factory=tuple)

    @field_validator("breakpoints", mode="before")
    @classmethod
    def _coerce_breakpoints(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, Mapping):
            # Shorthand form: ``{2023: 60000}``.
            return [
                {"from_year": int(year), "allowance": amount}
                for year, amount in value.items()
            ]
        return value

    @model_validator(mode="after")
    def _validate_schedule(self) -> Self:
        if self.default_allowance <= 0:
            raise ConfigurationError("The default allowance must be positive")
        if self.carry_forward_years < 1:
            raise ConfigurationError("carry_forward_years must be at least 1")

        seen: set[int] = set()
        for entry in self.breakpoints:
            if entry.from_year in seen:
                raise ConfigurationError(
                    f"Duplicate breakpoint year {entry.from_year} in the allowance schedule"
                )
            seen.add(entry.from_year)
        return self

    @computed_field
    @property
    def ordered_breakpoints(self) -> tuple[AllowanceBreakpoint, ...]:
        return tuple(sorted(self.breakpoints, key=lambda entry: entry.from_year))

    def allowance_for(self, year_start: int) -> float:
        """Return the statutory allowance for the tax year starting ``year_start``."""

        allowance = self.default_allowance
        for entry in self.ordered_breakpoints:
            if year_start < entry.from_year:
                break
            allowance = entry.allowance
        return float(allowance)


__all__ = [
    "AllowanceBreakpoint",
    "AllowanceScheduleConfig",
    "ConfigurationError",
    "ImmutableModel",
    "ValidationError",
]
