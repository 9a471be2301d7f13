"""Provider interfaces and data structures for FX rate sources."""

from .base import BaseRateProvider, FetchParseError, ProviderError, UnknownRateError
from .extraction import RateExtractor, extract_rate
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .mock import MockRateProvider
from .schemas import CurrencyPair
from .xrates_client import XratesClient, XratesClientConfig
from .xrates_provider import XratesProvider

__all__ = [
    "BaseRateProvider",
    "CurrencyPair",
    "FetchParseError",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "MockRateProvider",
    "ProviderError",
    "RateExtractor",
    "UnknownRateError",
    "XratesClient",
    "XratesClientConfig",
    "XratesProvider",
    "extract_rate",
]
