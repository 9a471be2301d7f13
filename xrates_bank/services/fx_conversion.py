"""Shared utilities for FX rate arithmetic and currency code handling."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any

ROUNDING_PRECISION = 28
CURRENCY_CODE_LENGTH = 3


def get_decimal_context():
    """Return the shared Decimal context used across FX conversions."""

    context = getcontext().copy()
    context.prec = ROUNDING_PRECISION
    context.rounding = ROUND_HALF_EVEN
    return context


def normalize_currency(code: Any) -> str:
    """Normalize a currency identifier to its canonical ISO form.

    Accepts plain strings as well as currency objects from money libraries
    that expose an ``iso_code`` attribute.

    Raises:
        ValueError: If the code is blank or not three ASCII letters.
    """

    raw = getattr(code, "iso_code", code)
    if raw is None or not str(raw).strip():
        raise ValueError("Currency code cannot be blank.")
    normalized = str(raw).strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    if len(normalized) != CURRENCY_CODE_LENGTH or not normalized.isalpha():
        raise ValueError(f"Currency code must be three letters: {code!r}")
    return normalized


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert input into a Decimal using the shared context."""

    context = get_decimal_context()
    with localcontext(context):
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal value: {value!r}") from exc


def invert_rate(rate: Decimal | int | float | str) -> Decimal:
    """Return the reciprocal of a rate.

    Raises:
        ZeroDivisionError: If the rate is zero.
    """

    rate_dec = to_decimal(rate)
    if rate_dec == 0:
        raise ZeroDivisionError("Cannot invert a zero rate.")

    context = get_decimal_context()
    with localcontext(context):
        return Decimal(1) / rate_dec


def convert_amount(
    amount: Decimal | int | float | str,
    rate: Decimal | int | float | str,
) -> Decimal:
    """Convert an amount using the provided rate."""

    context = get_decimal_context()
    with localcontext(context):
        amount_dec = to_decimal(amount)
        rate_dec = to_decimal(rate)
        return amount_dec * rate_dec
