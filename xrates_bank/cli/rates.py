"""CLI commands for looking up and flushing cached rates."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from xrates_bank.providers.base import ProviderError
from xrates_bank.providers.http_client import HTTPClientError
from xrates_bank.services.bank import EXTENSION_KEY


@click.command("get-rate")
@click.argument("from_currency")
@click.argument("to_currency")
@click.option("--amount", default=None, help="Also convert this amount")
@with_appcontext
def get_rate(from_currency: str, to_currency: str, amount: str | None) -> None:
    """Print the rate converting one FROM_CURRENCY into TO_CURRENCY."""

    bank = current_app.extensions[EXTENSION_KEY]
    try:
        rate = bank.get_rate(from_currency, to_currency)
        converted = bank.exchange(amount, from_currency, to_currency) if amount is not None else None
    except (ValueError, ProviderError, HTTPClientError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"1 {from_currency.upper()} = {rate} {to_currency.upper()}")
    if converted is not None:
        click.echo(f"{amount} {from_currency.upper()} = {converted} {to_currency.upper()}")


@click.command("flush-rates")
@with_appcontext
def flush_rates() -> None:
    """Drop every cached rate."""

    bank = current_app.extensions[EXTENSION_KEY]
    count = len(bank.rates)
    bank.flush_rates()
    click.echo(f"Flushed {count} cached rate(s).")
