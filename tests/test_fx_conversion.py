from __future__ import annotations

from decimal import Decimal

import pytest

from xrates_bank.services.fx_conversion import (
    convert_amount,
    invert_rate,
    normalize_currency,
    to_decimal,
)


def test_convert_amount():
    assert convert_amount("100", "1.25") == Decimal("125")


def test_convert_amount_avoids_float_artifacts():
    assert convert_amount(0.1, 3) == Decimal("0.3")


def test_invert_rate():
    assert invert_rate("20") == Decimal("0.05")
    assert invert_rate(Decimal("3")) == Decimal("0.3333333333333333333333333333")


def test_invert_zero_rate_raises():
    with pytest.raises(ZeroDivisionError):
        invert_rate("0.0")


def test_to_decimal_rejects_garbage():
    with pytest.raises(ValueError):
        to_decimal("abc")


def test_normalize_currency():
    assert normalize_currency(" eur ") == "EUR"
    with pytest.raises(ValueError):
        normalize_currency("")
