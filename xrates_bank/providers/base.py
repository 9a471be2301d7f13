"""Abstract interface and error taxonomy for FX rate providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from .schemas import CurrencyPair


class ProviderError(Exception):
    """Raised when an upstream provider cannot fulfill a request."""


class UnknownRateError(ProviderError):
    """Raised when the source reports no known conversion for a pair."""


class FetchParseError(ProviderError):
    """Raised when a source response cannot be turned into a rate."""


class BaseRateProvider(ABC):
    """Defines the interface all FX rate providers must implement."""

    name: str

    @abstractmethod
    def fetch_rate(self, pair: CurrencyPair) -> Decimal:
        """Retrieve a fresh rate for the given ordered pair.

        Implementations never consult a cache; callers decide when to fetch.
        """
