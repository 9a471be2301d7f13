"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, localcontext

from xrates_bank.services.fx_conversion import get_decimal_context, normalize_currency, to_decimal

from .base import BaseRateProvider, UnknownRateError
from .schemas import CurrencyPair

DEFAULT_USD_RATES: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.90"),
    "GBP": Decimal("0.78"),
    "JPY": Decimal("150.12"),
    "CHF": Decimal("0.88"),
}


class MockRateProvider(BaseRateProvider):
    """Deterministic provider deriving cross rates from a USD table."""

    name = "mock"

    def __init__(self, usd_rates: Mapping[str, Decimal | str | float] | None = None) -> None:
        table = usd_rates if usd_rates is not None else DEFAULT_USD_RATES
        self._usd_rates = {normalize_currency(code): to_decimal(value) for code, value in table.items()}
        self._usd_rates["USD"] = Decimal("1")
        self.fetch_count = 0

    def fetch_rate(self, pair: CurrencyPair) -> Decimal:
        self.fetch_count += 1
        try:
            from_rate = self._usd_rates[pair.from_currency]
            to_rate = self._usd_rates[pair.to_currency]
        except KeyError as exc:
            raise UnknownRateError(f"No mock rate for {pair}.") from exc

        with localcontext(get_decimal_context()):
            return to_rate / from_rate
