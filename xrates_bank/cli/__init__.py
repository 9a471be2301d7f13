"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .rates import flush_rates, get_rate


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(get_rate)
    app.cli.add_command(flush_rates)
