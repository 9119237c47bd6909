"""Application factory for the pension allowance backend."""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from pensionallowance.backend.config.schema import ConfigurationError

from .http import ProblemResponse, invalid_input_problem
from .routes import register_routes
from .routes.config import get_configuration_metadata
from .services.allocation import InvalidLedgerInput

_LOGGER = logging.getLogger(__name__)


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app() -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(
        os.getenv("PENSIONALLOWANCE_ALLOWED_ORIGINS")
    )

    if not allowed_origins:
        _LOGGER.warning(
            "No allowed origins configured; cross-origin requests will be rejected."
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return ProblemResponse("bad_request", 400, message=message).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        """Report a broken allowance schedule without leaking internals."""

        _LOGGER.error("Allowance schedule is invalid: %s", error)
        return ProblemResponse(
            "configuration_error",
            500,
            message="The allowance schedule could not be loaded",
        ).to_response()

    @app.errorhandler(InvalidLedgerInput)
    def handle_invalid_ledger_input(error: InvalidLedgerInput):
        """Reject ledger requests, naming the field at fault when known."""

        return invalid_input_problem(error).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface remaining validation errors to clients."""

        return ProblemResponse("validation_error", 400, message=str(error)).to_response()

    return app
