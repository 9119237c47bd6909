"""Integration coverage for allowance schedule endpoints."""

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from pensionallowance.backend.app.routes import config as config_routes
from pensionallowance.backend.config.schema import ConfigurationError


def test_list_allowances_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/allowances")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_allowance"] == 40_000
    assert payload["carry_forward_years"] == 3
    assert payload["breakpoints"][0]["from_year"] == 2023
    assert payload["breakpoints"][0]["label"] == "2023/24"
    assert payload["breakpoints"][0]["allowance"] == 60_000


@pytest.mark.parametrize(
    ("year", "expected_label", "expected_allowance"),
    [("2022", "2022/23", 40_000), ("2023-24", "2023/24", 60_000)],
)
def test_single_year_allowance_endpoint(
    client: FlaskClient, year: str, expected_label: str, expected_allowance: int
) -> None:
    response = client.get(f"/api/v1/config/allowances/{year}")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["label"] == expected_label
    assert payload["allowance"] == expected_allowance


def test_single_year_allowance_rejects_unknown_year(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/allowances/next-year")

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert payload["field"] == "year"
    assert payload["value"] == "next-year"


def test_broken_schedule_returns_configuration_error(
    client: FlaskClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken_schedule():
        raise ConfigurationError("default_allowance must be positive")

    monkeypatch.setattr(config_routes, "load_allowance_schedule", _broken_schedule)

    response = client.get("/api/v1/config/allowances")

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json()["error"] == "configuration_error"
