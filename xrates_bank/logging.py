"""Logging setup and structured log payloads for the x-rates bank."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

LOGGING_CONFIG_FLAG = "_logging_configured"
REQUEST_LOGGING_FLAG = "_request_logging_configured"

# Loggers that get the configured level; urllib3 logs every connection at DEBUG.
QUIET_LOGGERS = ("urllib3", "werkzeug")

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class JSONLogFormatter(logging.Formatter):
    """Render records as one JSON object per line, merging `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        return json.dumps(payload, default=str, separators=(",", ":"))


def setup_logging(app) -> None:
    """Install a single root handler honouring LOG_LEVEL / LOG_JSON_ENABLED / LOG_FORMAT."""

    if app.config.get(LOGGING_CONFIG_FLAG):
        return

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL") or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if str(app.config.get("LOG_JSON_ENABLED", False)).strip().lower() in {"1", "true", "yes", "on"}:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                app.config.get("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
            )
        )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    app.logger.handlers = []
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.config[LOGGING_CONFIG_FLAG] = True


def record_rate_outcome(pair: Any, *, cached: bool, expired: bool) -> None:
    """Remember how the current request's rate lookup was served."""

    g.rate_pair = str(pair)
    g.rate_outcome = "cached" if cached else "fetched"
    g.rate_expired = expired


def init_request_logging(app) -> None:
    """Log one line per request, tagged with the rate lookup it performed."""

    if app.config.get(REQUEST_LOGGING_FLAG):
        return

    @app.before_request
    def _start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_response(response):
        response.headers.setdefault(REQUEST_ID_HEADER, g.request_id)
        app.logger.info(
            "Rate request handled",
            extra=_rate_request_extra(event="rates.request", status=response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _log_failure(exc: BaseException | None):
        if exc is None or g.get("request_logged"):
            return
        app.logger.error(
            "Rate request failed",
            extra=_rate_request_extra(event="rates.request_failed", status=500, error=str(exc)),
        )

    app.config[REQUEST_LOGGING_FLAG] = True


def _rate_request_extra(*, event: str, status: int, error: str | None = None) -> dict[str, Any]:
    start = g.get("request_start")
    payload: dict[str, Any] = {
        "event": event,
        "method": request.method,
        "path": request.path,
        "status": status,
        "request_id": g.get("request_id"),
        "duration_ms": round((time.perf_counter() - start) * 1000, 3) if start is not None else None,
        "pair": g.get("rate_pair"),
        "outcome": g.get("rate_outcome"),
        "expired": g.get("rate_expired"),
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def bank_log_extra(
    *,
    provider: str,
    pair: Any,
    event: str,
    status: str,
    duration_ms: float | None = None,
    cached: bool | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Build the structured ``extra`` payload for bank and provider events."""

    payload: dict[str, Any] = {
        "event": event,
        "provider": provider,
        "pair": str(pair) if pair is not None else None,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "cached": cached,
        "request_id": g.get("request_id") if has_request_context() else None,
    }
    if error:
        payload["error"] = error
    return {key: value for key, value in payload.items() if value is not None}
