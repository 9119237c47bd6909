from pathlib import Path

import yaml

from pensionallowance.backend.app.services.allocation import parse_year_key
from pensionallowance.backend.config.allowance_config import (
    load_allowance_schedule,
    parse_allowance_schedule,
)
from pensionallowance.backend.config.schema import MAX_TAX_YEAR, MIN_TAX_YEAR
from pensionallowance.backend.config.validator import main, validate_allowance_schedule


def test_bundled_schedule_is_valid() -> None:
    assert validate_allowance_schedule(load_allowance_schedule()) == []


def test_validator_flags_unordered_breakpoints() -> None:
    config = parse_allowance_schedule(
        {
            "default_allowance": 40_000,
            "breakpoints": [
                {"from_year": 2023, "allowance": 60_000},
                {"from_year": 2014, "allowance": 40_000},
            ],
        }
    )

    errors = validate_allowance_schedule(config)

    assert any("ascending year order" in error for error in errors)


def test_validator_flags_out_of_range_year_and_bad_url() -> None:
    config = parse_allowance_schedule(
        {
            "default_allowance": 40_000,
            "breakpoints": [
                {"from_year": 1800, "allowance": 1_000, "notes_url": "gov.uk/annual-allowance"}
            ],
        }
    )

    errors = validate_allowance_schedule(config)

    assert any("between 1901 and 2100" in error for error in errors)
    assert any("notes_url" in error for error in errors)


def test_validator_and_year_parser_share_bounds() -> None:
    config = parse_allowance_schedule(
        {
            "default_allowance": 40_000,
            "breakpoints": [
                {"from_year": MIN_TAX_YEAR, "allowance": 1_000},
                {"from_year": MAX_TAX_YEAR + 1, "allowance": 2_000},
            ],
        }
    )

    errors = validate_allowance_schedule(config)

    assert parse_year_key(MIN_TAX_YEAR) == MIN_TAX_YEAR
    assert parse_year_key(MAX_TAX_YEAR + 1) is None
    expected = f"year must fall between {MIN_TAX_YEAR} and {MAX_TAX_YEAR}"
    assert [error for error in errors if "between" in error] == [
        f"breakpoints[{MAX_TAX_YEAR + 1}]: {expected}"
    ]


def test_validator_flags_implausible_window() -> None:
    config = parse_allowance_schedule({"default_allowance": 40_000, "carry_forward_years": 25})

    errors = validate_allowance_schedule(config)

    assert any(error.startswith("carry_forward_years") for error in errors)


def test_cli_reports_success_and_failures(tmp_path: Path, capsys) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text(yaml.safe_dump({"default_allowance": -5}), "utf-8")

    assert main([]) == 0
    assert "OK" in capsys.readouterr().out

    assert main([str(broken)]) == 1
    assert "failed to load configuration" in capsys.readouterr().out
