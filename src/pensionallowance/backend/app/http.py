"""Problem payloads returned by the ledger and configuration blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import jsonify

from pensionallowance.backend.app.services.allocation import InvalidLedgerInput


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body, optionally naming the offending request field."""

    error: str
    status: int
    message: str | None = None
    field: str | None = None
    value: Any = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.field is not None:
            payload["field"] = self.field
        if self.value is not None:
            payload["value"] = self.value
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def invalid_input_problem(error: InvalidLedgerInput) -> ProblemResponse:
    """Describe a rejected ledger request as a 400 ``validation_error``."""

    return ProblemResponse(
        "validation_error",
        400,
        message=str(error),
        field=error.field,
        value=error.value,
    )


__all__ = ["ProblemResponse", "invalid_input_problem"]
