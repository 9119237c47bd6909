"""Helpers for normalising incoming ledger requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def _resolve_selected_year(req: Request, payload: dict[str, Any]) -> None:
    """Populate ``selected_year`` from the query string when the body omits it."""

    if payload.get("selected_year") is not None:
        return

    selected = req.args.get("year")
    if selected and selected.strip():
        payload["selected_year"] = selected.strip()


def parse_ledger_payload(req: Request) -> dict[str, Any]:
    """Extract and validate a JSON payload from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    _resolve_selected_year(req, payload)

    return payload
