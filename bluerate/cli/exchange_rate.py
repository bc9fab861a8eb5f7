"""CLI for looking up the blue dollar rate from a date phrase."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from bluerate.providers import UpstreamError
from bluerate.services.rate_service import RateService
from bluerate.utils.date_phrases import DatePhraseError, resolve_date_phrase
from bluerate.utils.datetime import TODAY_TOKEN, utc_today

logger = logging.getLogger(__name__)


@click.command("exchange-rate")
@click.argument("phrase", nargs=-1, required=True)
@with_appcontext
def exchange_rate(phrase: tuple[str, ...]) -> None:
    """Print the USD to ARS blue rate for PHRASE (e.g. 'yesterday', 'a month ago')."""

    service: RateService = current_app.extensions["rate_service"]
    text = " ".join(phrase)
    try:
        requested = resolve_date_phrase(text, utc_today(service.cache.now()))
    except DatePhraseError as exc:
        raise click.BadParameter(str(exc), param_hint="PHRASE") from exc

    try:
        rate = service.get_rate(requested)
    except UpstreamError as exc:
        raise click.ClickException(f"Failed to fetch exchange rate: {exc}") from exc
    except Exception as exc:
        logger.exception("Unexpected error while resolving exchange rate for %s", requested)
        raise click.ClickException("Failed to fetch exchange rate") from exc

    label = "Today" if requested == TODAY_TOKEN else requested
    click.echo(f"{label}: {rate.value_sell:,.2f} ARS per USD ({service.source_name})")
