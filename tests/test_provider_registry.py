from __future__ import annotations

from decimal import Decimal

import pytest

from xrates_bank.providers import BaseRateProvider, CurrencyPair, ProviderError, UnknownRateError
from xrates_bank.providers.mock import MockRateProvider
from xrates_bank.providers.registry import (
    get_provider,
    list_providers,
    register_provider,
    reset_registry,
    unregister_provider,
)
from xrates_bank.providers.xrates_provider import XratesProvider


@pytest.fixture(autouse=True)
def _reset_providers():
    reset_registry()
    yield
    reset_registry()


def test_default_providers_registered():
    assert list_providers() == ["mock", "xrates"]


def test_default_provider_is_xrates(monkeypatch):
    monkeypatch.delenv("FX_RATE_PROVIDER", raising=False)

    provider = get_provider()

    assert isinstance(provider, XratesProvider)
    assert provider.name == "xrates"


def test_get_provider_respects_environment(monkeypatch):
    monkeypatch.setenv("FX_RATE_PROVIDER", "MOCK")

    assert isinstance(get_provider(), MockRateProvider)


def test_get_provider_passes_config_to_factory():
    provider = get_provider("xrates", {"XRATES_IMPLAUSIBLE_RATE_THRESHOLD": "0.5"})

    assert isinstance(provider, XratesProvider)
    assert provider.implausible_threshold == Decimal("0.5")


def test_register_and_unregister_custom_provider():
    class FixedProvider(BaseRateProvider):
        name = "fixed"

        def fetch_rate(self, pair: CurrencyPair) -> Decimal:
            return Decimal("2")

    register_provider("Fixed", lambda _config: FixedProvider())
    assert "fixed" in list_providers()
    assert isinstance(get_provider("fixed"), FixedProvider)

    unregister_provider("fixed")
    with pytest.raises(ProviderError):
        get_provider("fixed")


def test_register_provider_requires_name():
    with pytest.raises(ValueError):
        register_provider("", lambda _config: MockRateProvider())


def test_get_provider_unknown_name_raises():
    with pytest.raises(ProviderError) as exc_info:
        get_provider("does-not-exist")

    assert "mock, xrates" in str(exc_info.value)


def test_mock_provider_derives_cross_rates():
    provider = MockRateProvider()

    assert provider.fetch_rate(CurrencyPair("USD", "EUR")) == Decimal("0.90")
    assert provider.fetch_rate(CurrencyPair("EUR", "USD")) == Decimal(1) / Decimal("0.90")
    assert provider.fetch_count == 2


def test_mock_provider_unknown_currency():
    provider = MockRateProvider({"EUR": "0.9"})

    with pytest.raises(UnknownRateError):
        provider.fetch_rate(CurrencyPair("USD", "JPY"))
