"""Utilities for validating the allowance schedule and surfacing issues."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .allowance_config import (
    SCHEDULE_FILE,
    AllowanceBreakpoint,
    AllowanceScheduleConfig,
    ConfigurationError,
    _load_yaml,
    parse_allowance_schedule,
)
from .schema import MAX_TAX_YEAR, MIN_TAX_YEAR


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_breakpoints(breakpoints: Sequence[AllowanceBreakpoint]) -> list[str]:
    errors: list[str] = []

    years = [entry.from_year for entry in breakpoints]
    if years != sorted(years):
        errors.append(
            _format_scope("breakpoints", "breakpoints should be listed in ascending year order")
        )

    for entry in breakpoints:
        scope = f"breakpoints[{entry.from_year}]"
        if not MIN_TAX_YEAR <= entry.from_year <= MAX_TAX_YEAR:
            errors.append(
                _format_scope(
                    scope,
                    f"year must fall between {MIN_TAX_YEAR} and {MAX_TAX_YEAR}",
                )
            )
        if entry.notes_url and not entry.notes_url.startswith(("http://", "https://")):
            errors.append(_format_scope(scope, "notes_url must be an absolute HTTP(S) URL"))

    return errors


def validate_allowance_schedule(config: AllowanceScheduleConfig) -> list[str]:
    """Return human-readable issues detected in ``config``."""

    errors: list[str] = []

    if config.carry_forward_years > 10:
        errors.append(
            _format_scope(
                "carry_forward_years",
                f"window of {config.carry_forward_years} years looks implausible",
            )
        )

    errors.extend(_validate_breakpoints(config.breakpoints))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the annual allowance schedule and report issues."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Schedule files to validate (defaults to the bundled schedule)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    paths: list[Path] = args.paths or [SCHEDULE_FILE]

    exit_code = 0

    for path in paths:
        try:
            config = parse_allowance_schedule(_load_yaml(path))
        except (OSError, ConfigurationError) as error:
            print(f"[{path.name}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_allowance_schedule(config)
        if issues:
            exit_code = 1
            print(f"[{path.name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path.name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
