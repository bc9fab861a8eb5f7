"""Application-wide error utilities and handlers."""

from __future__ import annotations

from flask import Flask, jsonify


class APIError(Exception):
    """Base class for API-level errors rendered as ``{"error": message}``."""

    status_code: int = 400
    default_message: str = "Request could not be processed."

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = status_code


class ValidationError(APIError):
    """Missing or malformed request input; the caller may resubmit."""

    status_code = 400
    default_message = "Submitted data is invalid."


class RateUnavailableError(APIError):
    """Generic failure surfaced when no rate could be produced.

    Upstream and unexpected errors are logged where they are caught and
    replaced by this error so their details never reach the caller.
    """

    status_code = 500
    default_message = "Failed to fetch exchange rate"


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return jsonify({"error": error.message}), error.status_code
