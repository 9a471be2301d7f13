"""HTTP client for the x-rates.com currency calculator."""

from __future__ import annotations

import logging

from xrates_bank.providers.http_client import HTTPClient, HTTPClientConfig

from .schemas import CurrencyPair

logger = logging.getLogger(__name__)

SERVICE_URL = "https://x-rates.com"
SERVICE_PATH = "/calculator"


class XratesClientConfig:
    """Configuration parameters for the x-rates client."""

    def __init__(
        self,
        base_url: str = SERVICE_URL,
        path: str = SERVICE_PATH,
        timeout: float = 5.0,
        max_retries: int = 1,
        backoff_seconds: float = 0.5,
    ) -> None:
        self.base_url = base_url
        self.path = path
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds


class XratesClient:
    """Fetches calculator pages for a currency pair.

    Transport failures surface as ``HTTPClientError`` untouched.
    """

    def __init__(
        self,
        config: XratesClientConfig | None = None,
        client: HTTPClient | None = None,
    ) -> None:
        self._config = config or XratesClientConfig()
        self._client = client or HTTPClient(
            HTTPClientConfig(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                max_retries=self._config.max_retries,
                backoff_seconds=self._config.backoff_seconds,
            )
        )

    @staticmethod
    def build_params(pair: CurrencyPair) -> dict[str, str]:
        return {"from": pair.from_currency, "to": pair.to_currency, "amount": "1"}

    def fetch_page(self, pair: CurrencyPair) -> str:
        """Return the raw calculator page converting one unit of the pair."""

        logger.debug("Requesting x-rates calculator for %s", pair)
        return self._client.get(self._config.path, params=self.build_params(pair))
