"""x-rates.com provider implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

from xrates_bank.logging import bank_log_extra
from xrates_bank.providers.base import BaseRateProvider, FetchParseError
from xrates_bank.providers.schemas import CurrencyPair
from xrates_bank.services.fx_conversion import invert_rate, to_decimal

from .extraction import RateExtractor, extract_rate
from .xrates_client import SERVICE_PATH, SERVICE_URL, XratesClient, XratesClientConfig

logger = logging.getLogger(__name__)

# Heuristic: the calculator shows few significant digits for small results,
# so rates under this value are recomputed from the reverse direction.
DEFAULT_IMPLAUSIBLE_THRESHOLD = Decimal("0.1")


class XratesProvider(BaseRateProvider):
    """Provider that scrapes rates from the x-rates.com calculator."""

    name = "xrates"

    def __init__(
        self,
        client: XratesClient,
        *,
        extractor: RateExtractor = extract_rate,
        implausible_threshold: Decimal | str | float = DEFAULT_IMPLAUSIBLE_THRESHOLD,
    ) -> None:
        self._client = client
        self._extract = extractor
        self._threshold = to_decimal(implausible_threshold)

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> XratesProvider:
        client_config = XratesClientConfig(
            base_url=str(config.get("XRATES_BASE_URL") or SERVICE_URL),
            path=str(config.get("XRATES_CALCULATOR_PATH") or SERVICE_PATH),
            timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 5)),
            max_retries=int(config.get("XRATES_MAX_RETRIES", 1)),
            backoff_seconds=float(config.get("XRATES_BACKOFF_SECONDS", 0.5)),
        )
        threshold = config.get("XRATES_IMPLAUSIBLE_RATE_THRESHOLD") or DEFAULT_IMPLAUSIBLE_THRESHOLD
        return cls(XratesClient(client_config), implausible_threshold=str(threshold))

    @property
    def implausible_threshold(self) -> Decimal:
        return self._threshold

    def fetch_rate(self, pair: CurrencyPair) -> Decimal:
        rate = self._fetch_direct(pair)
        if rate >= self._threshold:
            return rate

        reverse = pair.reversed()
        logger.info(
            "Rate %s for %s below %s; deriving it from %s",
            rate,
            pair,
            self._threshold,
            reverse,
            extra=bank_log_extra(
                provider=self.name,
                pair=pair,
                event="provider.inverse_fallback",
                status="fallback",
            ),
        )
        reverse_rate = self._fetch_direct(reverse)
        try:
            return invert_rate(reverse_rate)
        except ZeroDivisionError as exc:
            raise FetchParseError(f"x-rates returned a zero rate for {reverse}.") from exc

    def _fetch_direct(self, pair: CurrencyPair) -> Decimal:
        body = self._client.fetch_page(pair)
        return self._extract(body)
