"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from pensionallowance.backend.app import create_app  # noqa: E402

# Six-year series used across the suite: 2022/23 draws on 2020/21 and
# 2024/25 leaves 10000 unallocated after exhausting 2023/24.
SIX_YEAR_CONTRIBUTIONS = {
    "2019/20": 10_000,
    "2020/21": 0,
    "2021/22": 40_000,
    "2022/23": 50_000,
    "2023/24": 52_000,
    "2024/25": 78_000,
}


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def six_year_contributions() -> dict[str, int]:
    """Contribution totals for the reference six-year scenario."""

    return dict(SIX_YEAR_CONTRIBUTIONS)
