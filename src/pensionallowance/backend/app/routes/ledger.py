"""REST endpoints for annual allowance ledgers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from pensionallowance.backend.app.services.ledger_service import calculate_ledger
from pensionallowance.backend.services import build_ledger_response, parse_ledger_payload

blueprint = Blueprint("ledger", __name__, url_prefix="/api/v1")


@blueprint.post("/ledger")
def create_ledger() -> tuple[Any, int]:
    """Build a carry-forward ledger from the submitted contribution totals."""

    payload = parse_ledger_payload(request)
    result = calculate_ledger(payload)

    return build_ledger_response(result)
