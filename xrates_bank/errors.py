"""Application-wide error utilities and handlers."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify

from xrates_bank.providers.base import FetchParseError, UnknownRateError
from xrates_bank.providers.http_client import HTTPClientError


class APIError(Exception):
    """Base class for API-level errors."""

    status_code: int = 400

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class ValidationError(APIError):
    """Error raised for validation failures."""

    status_code = 422


class NotFoundError(APIError):
    """Error raised when a requested resource does not exist."""

    status_code = 404


DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Request could not be processed.",
    404: "Resource not found.",
    422: "Submitted data is invalid.",
    502: "Upstream provider returned an unreadable response.",
    503: "Upstream provider unavailable.",
}


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return _error_response(error.message, error.status_code, error.payload)

    @app.errorhandler(UnknownRateError)
    def handle_unknown_rate(error: UnknownRateError):
        return _error_response(str(error), 404, {"error": "unknown_rate"})

    @app.errorhandler(FetchParseError)
    def handle_fetch_parse(error: FetchParseError):
        return _error_response(str(error), 502, {"error": "unparseable_response"})

    @app.errorhandler(HTTPClientError)
    def handle_transport(error: HTTPClientError):
        payload: dict[str, Any] = {"error": "upstream_unavailable"}
        if error.status_code is not None:
            payload["upstream_status"] = error.status_code
        return _error_response(str(error), 503, payload)


def _error_response(message: str | None, status_code: int, payload: dict[str, Any] | None):
    response: dict[str, Any] = {
        "message": message or DEFAULT_STATUS_MESSAGES.get(status_code, "Request failed.")
    }
    if payload:
        response.update(payload)
    return jsonify(response), status_code
