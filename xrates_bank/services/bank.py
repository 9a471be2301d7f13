"""Exchange bank that caches scraped rates under a TTL policy."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from time import perf_counter
from typing import Any

from xrates_bank.logging import bank_log_extra
from xrates_bank.providers import BaseRateProvider, CurrencyPair, ProviderError
from xrates_bank.providers.http_client import HTTPClientError
from xrates_bank.providers.registry import get_provider
from xrates_bank.services.expiration import ExpirationPolicy
from xrates_bank.services.fx_conversion import convert_amount
from xrates_bank.services.rate_store import RateStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = "xrates_bank"


class XratesBank:
    """Rate lookup strategy for money libraries.

    Rates are looked up cache-aside: a miss triggers exactly one provider
    fetch whose result is stored before being returned. Every lookup first
    checks the expiration policy and drops the whole cache once it expires.

    Banks of one class built without an explicit ``policy`` share that
    class's ``default_policy``, so configuring its TTL at startup applies to
    all of them. Subclasses get a policy of their own.

    Example::

        bank = XratesBank()
        bank.get_rate("USD", "EUR")   # Decimal('0.889')
        bank.flush_rate("USD", "EUR") # Decimal('0.889')
    """

    default_policy = ExpirationPolicy()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Each bank class keeps its own TTL unless it declares a policy itself.
        if "default_policy" not in cls.__dict__:
            cls.default_policy = ExpirationPolicy()

    def __init__(
        self,
        provider: BaseRateProvider | None = None,
        *,
        policy: ExpirationPolicy | None = None,
        store: RateStore | None = None,
    ) -> None:
        self._provider = provider or get_provider()
        self._policy = policy if policy is not None else type(self).default_policy
        self._store = store if store is not None else RateStore()

    @classmethod
    def configure_ttl(cls, ttl_seconds: float | None) -> None:
        """Set the TTL shared by every bank using the default policy."""

        cls.default_policy.set_ttl(ttl_seconds)

    @property
    def provider(self) -> BaseRateProvider:
        return self._provider

    @property
    def policy(self) -> ExpirationPolicy:
        return self._policy

    @property
    def rates(self) -> Mapping[CurrencyPair, Decimal]:
        """Read-only view of the currently cached rates."""

        return self._store.rates

    def set_ttl(self, ttl_seconds: float | None) -> None:
        self._policy.set_ttl(ttl_seconds)

    def expire_rates(self) -> bool:
        """Flush every rate if the policy has expired.

        Returns:
            True when the cache was flushed and the expiration reset.
        """

        if not self._policy.is_expired():
            return False

        flushed = len(self._store)
        self._store.clear()
        expires_at = self._policy.refresh()
        logger.info(
            "Expired %s cached rate(s); next expiration at %s",
            flushed,
            expires_at.isoformat(),
            extra=bank_log_extra(
                provider=self._provider_name(),
                pair=None,
                event="bank.expire",
                status="expired",
            ),
        )
        return True

    def get_rate(self, from_currency: Any, to_currency: Any) -> Decimal:
        """Return the rate converting one unit of ``from_currency``.

        Raises:
            UnknownRateError: The source has no rate for the pair.
            FetchParseError: The source answer could not be parsed.
            HTTPClientError: The source could not be reached.
        """

        pair = CurrencyPair(from_currency, to_currency)
        self.expire_rates()

        cached = self._store.get(pair)
        if cached is not None:
            logger.debug(
                "Serving cached rate for %s",
                pair,
                extra=bank_log_extra(
                    provider=self._provider_name(),
                    pair=pair,
                    event="bank.cache_hit",
                    status="success",
                    cached=True,
                ),
            )
            return cached

        return self._store.add(pair, self._fetch(pair))

    def add_rate(self, from_currency: Any, to_currency: Any, rate: Decimal | int | float | str) -> Decimal:
        """Store a rate supplied by the caller, replacing any cached value."""

        return self._store.add(CurrencyPair(from_currency, to_currency), rate)

    def flush_rates(self) -> dict[CurrencyPair, Decimal]:
        """Clear every cached rate regardless of the expiration policy."""

        logger.info(
            "Flushing %s cached rate(s)",
            len(self._store),
            extra=bank_log_extra(
                provider=self._provider_name(),
                pair=None,
                event="bank.flush",
                status="success",
            ),
        )
        return self._store.clear()

    def flush_rate(self, from_currency: Any, to_currency: Any) -> Decimal | None:
        """Remove and return the cached rate for one ordered pair."""

        return self._store.remove(CurrencyPair(from_currency, to_currency))

    def exchange(self, amount: Decimal | int | float | str, from_currency: Any, to_currency: Any) -> Decimal:
        """Convert ``amount`` using the looked-up rate."""

        if CurrencyPair(from_currency, to_currency).is_identity:
            return convert_amount(amount, Decimal("1"))
        return convert_amount(amount, self.get_rate(from_currency, to_currency))

    def _fetch(self, pair: CurrencyPair) -> Decimal:
        provider_name = self._provider_name()
        start = perf_counter()
        try:
            rate = self._provider.fetch_rate(pair)
        except (ProviderError, HTTPClientError) as exc:
            logger.warning(
                "Rate fetch for %s failed: %s",
                pair,
                exc,
                extra=bank_log_extra(
                    provider=provider_name,
                    pair=pair,
                    event="bank.fetch",
                    status="error",
                    duration_ms=(perf_counter() - start) * 1000,
                    cached=False,
                    error=str(exc),
                ),
            )
            raise

        logger.info(
            "Fetched rate %s for %s",
            rate,
            pair,
            extra=bank_log_extra(
                provider=provider_name,
                pair=pair,
                event="bank.fetch",
                status="success",
                duration_ms=(perf_counter() - start) * 1000,
                cached=False,
            ),
        )
        return rate

    def _provider_name(self) -> str:
        return getattr(self._provider, "name", self._provider.__class__.__name__)


def create_bank(config: Mapping[str, Any]) -> XratesBank:
    """Build a bank from a configuration mapping."""

    provider = get_provider(config.get("FX_RATE_PROVIDER"), config)
    return XratesBank(provider)


def init_bank(app) -> XratesBank:
    """Create the bank, apply the configured TTL, and attach it to the app."""

    bank = create_bank(app.config)
    XratesBank.configure_ttl(app.config.get("XRATES_TTL_SECONDS"))
    app.extensions[EXTENSION_KEY] = bank
    return bank
