"""Expose the allowance schedule consumed by the decoupled front-end.

The presentation layer reads the statutory caps and the carry-forward window
from here instead of hard-coding them alongside its charts.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from pensionallowance.backend.app.http import ProblemResponse
from pensionallowance.backend.app.services.allocation import format_tax_year, parse_year_key
from pensionallowance.backend.config.allowance_config import load_allowance_schedule
from pensionallowance.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the allowance schedule."""

    schedule = load_allowance_schedule()
    return {
        "version": get_project_version(),
        "carry_forward_years": schedule.carry_forward_years,
    }


@blueprint.get("/allowances")
def list_allowances():
    """Return the full allowance schedule."""

    schedule = load_allowance_schedule()
    payload = {
        "default_allowance": schedule.default_allowance,
        "carry_forward_years": schedule.carry_forward_years,
        "breakpoints": [
            {
                "from_year": entry.from_year,
                "label": format_tax_year(entry.from_year),
                "allowance": entry.allowance,
                "notes_url": entry.notes_url,
            }
            for entry in schedule.ordered_breakpoints
        ],
    }
    return jsonify(payload), 200


@blueprint.get("/allowances/<year>")
def get_allowance(year: str):
    """Return the allowance for a single tax year (``2023`` or ``2023-24``)."""

    year_start = parse_year_key(year)
    if year_start is None:
        return ProblemResponse(
            "not_found",
            404,
            message=f"Unrecognised tax year: {year}",
            field="year",
            value=year,
        ).to_response()

    schedule = load_allowance_schedule()
    payload = {
        "year": year_start,
        "label": format_tax_year(year_start),
        "allowance": schedule.allowance_for(year_start),
        "carry_forward_years": schedule.carry_forward_years,
    }
    return jsonify(payload), 200
