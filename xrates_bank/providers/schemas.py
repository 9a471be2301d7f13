"""Value types shared by providers and the rate cache."""

from __future__ import annotations

from dataclasses import dataclass

from xrates_bank.services.fx_conversion import normalize_currency


@dataclass(frozen=True)
class CurrencyPair:
    """Ordered (from, to) currency pair used as a rate cache key.

    Pairs are directional: ``CurrencyPair("USD", "EUR")`` and
    ``CurrencyPair("EUR", "USD")`` are distinct keys.
    """

    from_currency: str
    to_currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_currency", normalize_currency(self.from_currency))
        object.__setattr__(self, "to_currency", normalize_currency(self.to_currency))

    def reversed(self) -> CurrencyPair:
        return CurrencyPair(self.to_currency, self.from_currency)

    @property
    def is_identity(self) -> bool:
        return self.from_currency == self.to_currency

    def __str__(self) -> str:
        return f"{self.from_currency}/{self.to_currency}"
