"""In-memory store of exchange rates keyed by ordered currency pair."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING

from xrates_bank.services.fx_conversion import to_decimal

if TYPE_CHECKING:  # pragma: no cover
    from xrates_bank.providers.schemas import CurrencyPair


class RateStore:
    """Mapping of ``CurrencyPair`` to ``Decimal`` with at most one rate per pair."""

    def __init__(self) -> None:
        self._rates: dict[CurrencyPair, Decimal] = {}

    @property
    def rates(self) -> Mapping[CurrencyPair, Decimal]:
        """Read-only live view of the stored rates."""

        return MappingProxyType(self._rates)

    def get(self, pair: CurrencyPair) -> Decimal | None:
        return self._rates.get(pair)

    def add(self, pair: CurrencyPair, rate: Decimal | int | float | str) -> Decimal:
        """Insert or overwrite the rate for ``pair`` and return the stored value."""

        stored = to_decimal(rate)
        self._rates[pair] = stored
        return stored

    def remove(self, pair: CurrencyPair) -> Decimal | None:
        """Remove the rate for ``pair``; returns ``None`` when nothing was stored."""

        return self._rates.pop(pair, None)

    def clear(self) -> dict[CurrencyPair, Decimal]:
        self._rates.clear()
        return dict(self._rates)

    def __contains__(self, pair: object) -> bool:
        return pair in self._rates

    def __len__(self) -> int:
        return len(self._rates)
