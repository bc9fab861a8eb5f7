"""Route handlers for blue dollar rate lookups."""

from __future__ import annotations

import logging

from flask import current_app
from flask.views import MethodView

from bluerate.errors import RateUnavailableError
from bluerate.logging import current_request_id
from bluerate.providers import UpstreamError
from bluerate.schemas import ErrorSchema, ExchangeRateQuerySchema, ExchangeRateSchema
from bluerate.services.rate_service import RateService
from bluerate.validation import validate_date_param

from . import blp

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"
TARGET_CURRENCY = "ARS"


@blp.route("")
class ExchangeRate(MethodView):
    @blp.arguments(ExchangeRateQuerySchema, location="query")
    @blp.response(200, ExchangeRateSchema())
    @blp.alt_response(400, schema=ErrorSchema(), description="Missing or malformed date")
    @blp.alt_response(500, schema=ErrorSchema(), description="Rate could not be fetched")
    def get(self, args):
        raw_date = args.get("date")
        requested = validate_date_param(raw_date)

        service: RateService = current_app.extensions["rate_service"]
        try:
            rate = service.get_rate(requested)
        except UpstreamError as exc:
            logger.error(
                "Exchange rate API error for %s: %s",
                requested,
                exc,
                extra={
                    "event": "exchange_rate.failed",
                    "requested_date": requested,
                    "upstream_status": exc.status_code,
                    "request_id": current_request_id(),
                },
            )
            raise RateUnavailableError() from exc
        except Exception as exc:
            logger.exception(
                "Unexpected error while resolving exchange rate for %s",
                requested,
                extra={
                    "event": "exchange_rate.failed",
                    "requested_date": requested,
                    "request_id": current_request_id(),
                },
            )
            raise RateUnavailableError() from exc

        return {
            "date": raw_date,
            "base": BASE_CURRENCY,
            "target": TARGET_CURRENCY,
            "rate": rate.value_sell,
            "source": service.source_name,
        }
