"""Application configuration classes."""

from __future__ import annotations

import math
import os
from decimal import Decimal, InvalidOperation

SUPPORTED_RATE_PROVIDERS = {"xrates", "x-rates", "mock"}
PROVIDER_ALIASES = {"x-rates": "xrates"}
DISABLED_TTL_VALUES = {"", "none", "null", "off", "disabled"}


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def parse_ttl(value: str | int | float | None) -> float | None:
    """Parse a TTL setting; blank or disabled markers yield ``None``."""

    if value is None:
        return None
    if isinstance(value, int | float):
        ttl = float(value)
    else:
        text = str(value).strip().lower()
        if text in DISABLED_TTL_VALUES:
            return None
        try:
            ttl = float(text)
        except ValueError as exc:
            raise ValueError(f"Invalid XRATES_TTL_SECONDS '{value}'") from exc
    if not math.isfinite(ttl):
        raise ValueError(f"Invalid XRATES_TTL_SECONDS '{value}'")
    if ttl < 0:
        raise ValueError("XRATES_TTL_SECONDS cannot be negative")
    return ttl


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "xrates-bank"
    FX_RATE_PROVIDER = _get_env("FX_RATE_PROVIDER", "xrates")
    XRATES_BASE_URL = _get_env("XRATES_BASE_URL", "https://x-rates.com")
    XRATES_CALCULATOR_PATH = _get_env("XRATES_CALCULATOR_PATH", "/calculator")
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "5"))
    XRATES_MAX_RETRIES = int(_get_env("XRATES_MAX_RETRIES", "1"))
    XRATES_BACKOFF_SECONDS = float(_get_env("XRATES_BACKOFF_SECONDS", "0.5"))
    XRATES_TTL_SECONDS: float | str | None = _get_env("XRATES_TTL_SECONDS", "")
    XRATES_IMPLAUSIBLE_RATE_THRESHOLD = _get_env("XRATES_IMPLAUSIBLE_RATE_THRESHOLD", "0.1")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for the test suite; never touches the network."""

    DEBUG = False
    TESTING = True
    FX_RATE_PROVIDER = "mock"
    XRATES_TTL_SECONDS = None
    LOG_LEVEL = "WARNING"


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If a configured value is invalid.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_provider(config_cls)
    _validate_rates(config_cls)
    return config_cls


def _validate_provider(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_provider(config_cls.FX_RATE_PROVIDER)
    if normalized not in SUPPORTED_RATE_PROVIDERS:
        raise ValueError(
            f"Unsupported FX_RATE_PROVIDER '{config_cls.FX_RATE_PROVIDER}'. "
            f"Allowed values: {sorted(SUPPORTED_RATE_PROVIDERS)}"
        )
    config_cls.FX_RATE_PROVIDER = normalized


def _validate_rates(config_cls: type[BaseConfig]) -> None:
    config_cls.XRATES_TTL_SECONDS = parse_ttl(config_cls.XRATES_TTL_SECONDS)
    try:
        Decimal(str(config_cls.XRATES_IMPLAUSIBLE_RATE_THRESHOLD))
    except InvalidOperation as exc:
        raise ValueError(
            f"Invalid XRATES_IMPLAUSIBLE_RATE_THRESHOLD "
            f"'{config_cls.XRATES_IMPLAUSIBLE_RATE_THRESHOLD}'"
        ) from exc


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
