"""Routes for inspecting and managing cached FX rates."""

from __future__ import annotations

from flask import Response, current_app, jsonify

from xrates_bank.errors import APIError, NotFoundError, ValidationError
from xrates_bank.logging import record_rate_outcome
from xrates_bank.providers.schemas import CurrencyPair
from xrates_bank.services.bank import EXTENSION_KEY, XratesBank

from . import bp


def _bank() -> XratesBank:
    bank: XratesBank | None = current_app.extensions.get(EXTENSION_KEY)  # type: ignore[assignment]
    if bank is None:
        raise APIError("Exchange bank unavailable.", status_code=503)
    return bank


def _pair(from_code: str, to_code: str) -> CurrencyPair:
    try:
        return CurrencyPair(from_code, to_code)
    except ValueError as exc:
        raise ValidationError(str(exc), payload={"field": "currency"}) from exc


def _serialize_rates(bank: XratesBank) -> dict[str, str]:
    return {str(pair): str(rate) for pair, rate in sorted(bank.rates.items(), key=lambda item: str(item[0]))}


@bp.get("")
def list_rates() -> Response:
    """Return every rate currently held in the cache."""

    bank = _bank()
    return jsonify({"count": len(bank.rates), "rates": _serialize_rates(bank)})


@bp.get("/<from_code>/<to_code>")
def get_rate(from_code: str, to_code: str) -> Response:
    """Look up a rate, fetching it from the provider on a cache miss."""

    bank = _bank()
    pair = _pair(from_code, to_code)
    expired = bank.expire_rates()
    cached = pair in bank.rates
    rate = bank.get_rate(pair.from_currency, pair.to_currency)
    record_rate_outcome(pair, cached=cached, expired=expired)
    return jsonify(
        {
            "from": pair.from_currency,
            "to": pair.to_currency,
            "rate": str(rate),
            "cached": cached,
        }
    )


@bp.delete("")
def flush_rates() -> Response:
    bank = _bank()
    flushed = len(bank.rates)
    bank.flush_rates()
    return jsonify({"flushed": flushed})


@bp.delete("/<from_code>/<to_code>")
def flush_rate(from_code: str, to_code: str) -> Response:
    bank = _bank()
    pair = _pair(from_code, to_code)
    removed = bank.flush_rate(pair.from_currency, pair.to_currency)
    if removed is None:
        raise NotFoundError(f"No cached rate for {pair}.")
    return jsonify({"from": pair.from_currency, "to": pair.to_currency, "rate": str(removed)})


@bp.post("/expire")
def expire_rates() -> Response:
    """Run the expiration check immediately."""

    bank = _bank()
    expired = bank.expire_rates()
    expires_at = bank.policy.expires_at
    return jsonify(
        {
            "expired": expired,
            "expires_at": expires_at.isoformat() if expires_at else None,
        }
    )
