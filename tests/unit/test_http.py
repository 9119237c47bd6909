"""Unit tests for problem payloads."""

from __future__ import annotations

from pensionallowance.backend.app.http import ProblemResponse, invalid_input_problem
from pensionallowance.backend.app.services.allocation import InvalidLedgerInput


def test_problem_payload_omits_unset_members() -> None:
    problem = ProblemResponse("bad_request", 400)

    assert problem.as_dict() == {"error": "bad_request"}


def test_invalid_input_problem_names_the_offending_field() -> None:
    error = InvalidLedgerInput(
        "Unrecognised tax year: 'soon'", field="selected_year", value="soon"
    )

    problem = invalid_input_problem(error)

    assert problem.status == 400
    assert problem.as_dict() == {
        "error": "validation_error",
        "message": "Unrecognised tax year: 'soon'",
        "field": "selected_year",
        "value": "soon",
    }


def test_invalid_input_problem_without_field_keeps_message_only() -> None:
    problem = invalid_input_problem(InvalidLedgerInput("Payload must be a mapping"))

    assert problem.as_dict() == {
        "error": "validation_error",
        "message": "Payload must be a mapping",
    }
