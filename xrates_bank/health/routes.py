"""Route handlers for health checks."""

from __future__ import annotations

from flask import Response, current_app, jsonify

from xrates_bank.services.bank import EXTENSION_KEY, XratesBank

from . import bp


@bp.get("")
def health() -> Response:
    bank: XratesBank | None = current_app.extensions.get(EXTENSION_KEY)  # type: ignore[assignment]
    app_name = current_app.config.get("APP_NAME", "xrates-bank")

    if bank is None:
        return jsonify({"status": "uninitialized", "app": app_name}), 503

    policy = bank.policy
    return jsonify(
        {
            "status": "ok",
            "app": app_name,
            "provider": bank.provider.name,
            "ttl_seconds": policy.ttl_seconds,
            "expires_at": policy.expires_at.isoformat() if policy.expires_at else None,
            "cached_rates": len(bank.rates),
        }
    )
