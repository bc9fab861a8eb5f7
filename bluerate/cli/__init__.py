"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .exchange_rate import exchange_rate


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(exchange_rate)
