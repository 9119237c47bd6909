"""Configuration loader for the annual allowance schedule."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import AllowanceBreakpoint, AllowanceScheduleConfig, ConfigurationError

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
SCHEDULE_FILE = CONFIG_DIRECTORY / "allowances.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def parse_allowance_schedule(raw: dict[str, Any]) -> AllowanceScheduleConfig:
    """Validate a raw mapping into an :class:`AllowanceScheduleConfig`."""

    try:
        return AllowanceScheduleConfig.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Allowance schedule validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_allowance_schedule() -> AllowanceScheduleConfig:
    """Load and cache the allowance schedule from disk."""

    if not SCHEDULE_FILE.exists():
        raise FileNotFoundError(f"Allowance schedule not found: {SCHEDULE_FILE.name}")

    return parse_allowance_schedule(_load_yaml(SCHEDULE_FILE))


def allowance_for(year_start: int) -> float:
    """Return the statutory annual allowance for the tax year starting ``year_start``."""

    return load_allowance_schedule().allowance_for(year_start)


def carry_forward_years() -> int:
    """Return how many preceding years may supply unused allowance."""

    return load_allowance_schedule().carry_forward_years


__all__ = [
    "AllowanceBreakpoint",
    "AllowanceScheduleConfig",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "SCHEDULE_FILE",
    "allowance_for",
    "carry_forward_years",
    "load_allowance_schedule",
    "parse_allowance_schedule",
]
