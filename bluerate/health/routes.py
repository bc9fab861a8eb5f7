"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from bluerate.schemas import HealthRatesSchema, HealthStatusSchema
from bluerate.services import CacheKey, RateKind, RateService

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "blue-rate"),
        }


@blp.route("/rates")
class HealthRates(MethodView):
    @blp.response(200, HealthRatesSchema())
    def get(self):
        service: RateService = current_app.extensions["rate_service"]
        cache = service.cache
        entries = cache.snapshot()
        historical_entries = sum(1 for key in entries if key.kind is RateKind.HISTORICAL)

        latest = entries.get(CacheKey.latest())
        if latest is None:
            return {
                "status": "uninitialized",
                "provider": service.source_name,
                "latest_date": None,
                "latest_age_seconds": None,
                "latest_fresh": None,
                "historical_entries": historical_entries,
            }

        return {
            "status": "ok",
            "provider": service.source_name,
            "latest_date": latest.rate.date,
            "latest_age_seconds": round(cache.age(latest).total_seconds(), 3),
            "latest_fresh": cache.is_fresh(latest, service.ttl_for(RateKind.LATEST)),
            "historical_entries": historical_entries,
        }
