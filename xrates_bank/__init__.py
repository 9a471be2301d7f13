"""x-rates.com exchange bank with a TTL-bound rate cache."""

from __future__ import annotations

from flask import Flask

from .config import get_config
from .providers import (
    BaseRateProvider,
    CurrencyPair,
    FetchParseError,
    HTTPClientError,
    MockRateProvider,
    ProviderError,
    UnknownRateError,
    XratesProvider,
)
from .services.bank import XratesBank, create_bank, init_bank
from .services.expiration import ExpirationPolicy
from .services.rate_store import RateStore

__all__ = [
    "BaseRateProvider",
    "CurrencyPair",
    "ExpirationPolicy",
    "FetchParseError",
    "HTTPClientError",
    "MockRateProvider",
    "ProviderError",
    "RateStore",
    "UnknownRateError",
    "XratesBank",
    "XratesProvider",
    "create_app",
    "create_bank",
]


def create_app(config_name: str | None = None) -> Flask:
    """Application factory for the rate cache diagnostics service."""

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    _register_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    from .cli import register_cli

    register_cli(app)
    return app


def _register_extensions(app: Flask) -> None:
    from .logging import init_request_logging, setup_logging

    setup_logging(app)
    init_request_logging(app)
    init_bank(app)


def _register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""

    from .health import bp as health_bp
    from .rates import bp as rates_bp

    app.register_blueprint(health_bp, url_prefix="/health")
    app.register_blueprint(rates_bp, url_prefix="/rates")


def _register_error_handlers(app: Flask) -> None:
    """Register global error handlers."""

    from .errors import register_error_handlers

    register_error_handlers(app)
