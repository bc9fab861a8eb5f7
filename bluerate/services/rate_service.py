"""Rate lookups backed by the in-process cache and the configured provider."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from time import perf_counter

from bluerate.logging import rate_log_extra
from bluerate.providers import BaseRateProvider, Rate, UpstreamError
from bluerate.providers.registry import get_provider
from bluerate.utils.datetime import TODAY_TOKEN, utc_today

from .rate_cache import CacheKey, RateCache, RateKind, init_cache

logger = logging.getLogger(__name__)

DEFAULT_LATEST_TTL = timedelta(minutes=15)
DEFAULT_HISTORICAL_TTL = timedelta(hours=24)


class RateService:
    """Resolve a requested day to a blue dollar rate.

    The latest quote moves intraday and is kept for ``latest_ttl``; a closed
    day never changes and is kept for ``historical_ttl``. Upstream failures
    propagate as :class:`UpstreamError` and leave the cache untouched.
    """

    def __init__(
        self,
        provider: BaseRateProvider,
        cache: RateCache,
        *,
        latest_ttl: timedelta = DEFAULT_LATEST_TTL,
        historical_ttl: timedelta = DEFAULT_HISTORICAL_TTL,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._ttls = {
            RateKind.LATEST: latest_ttl,
            RateKind.HISTORICAL: historical_ttl,
        }

    @property
    def source_name(self) -> str:
        return getattr(self._provider, "display_name", self._provider_name())

    @property
    def cache(self) -> RateCache:
        return self._cache

    def ttl_for(self, kind: RateKind) -> timedelta:
        return self._ttls[kind]

    def is_today(self, requested: str) -> bool:
        """True for the ``today`` token or today's UTC date in ISO form."""

        return requested == TODAY_TOKEN or requested == utc_today(self._cache.now()).isoformat()

    def get_rate(self, requested: str) -> Rate:
        """Route ``requested`` to the latest or historical fetch.

        Raises:
            ValueError: If ``requested`` is neither the token nor an ISO date.
            UpstreamError: If the provider could not be reached or answered badly.
        """

        if self.is_today(requested):
            return self.fetch_latest()
        return self.fetch_historical(date.fromisoformat(requested))

    def fetch_latest(self) -> Rate:
        return self._fetch(CacheKey.latest(), self._provider.get_latest)

    def fetch_historical(self, day: date) -> Rate:
        return self._fetch(CacheKey.historical(day), lambda: self._provider.get_historical(day))

    def _fetch(self, key: CacheKey, load) -> Rate:
        provider_name = self._provider_name()
        cache_key = str(key)

        entry = self._cache.get(key)
        if entry is not None and self._cache.is_fresh(entry, self.ttl_for(key.kind)):
            logger.debug(
                "Rate cache hit for %s",
                cache_key,
                extra=rate_log_extra(
                    provider=provider_name,
                    cache_key=cache_key,
                    event="rate.cache",
                    status="hit",
                ),
            )
            return entry.rate

        start = perf_counter()
        try:
            rate = load()
        except UpstreamError as exc:
            logger.warning(
                "Upstream fetch for %s failed: %s",
                cache_key,
                exc,
                extra=rate_log_extra(
                    provider=provider_name,
                    cache_key=cache_key,
                    event="rate.fetch",
                    status="error",
                    duration_ms=(perf_counter() - start) * 1000,
                    error=str(exc),
                    status_code=exc.status_code,
                ),
            )
            raise

        self._cache.set(key, rate)
        logger.info(
            "Fetched %s rate from %s",
            cache_key,
            provider_name,
            extra=rate_log_extra(
                provider=provider_name,
                cache_key=cache_key,
                event="rate.fetch",
                status="success",
                duration_ms=(perf_counter() - start) * 1000,
            ),
        )
        return rate

    def _provider_name(self) -> str:
        return getattr(self._provider, "name", self._provider.__class__.__name__)


def init_rate_service(app) -> RateService:
    """Create the rate service from app config and store it on the app."""

    provider = app.extensions.get("rate_provider")
    if provider is None:
        provider = get_provider(app.config.get("RATE_PROVIDER"), app.config)

    service = RateService(
        provider,
        init_cache(app),
        latest_ttl=timedelta(seconds=int(app.config.get("LATEST_CACHE_TTL_SECONDS", 900))),
        historical_ttl=timedelta(seconds=int(app.config.get("HISTORICAL_CACHE_TTL_SECONDS", 86400))),
    )
    app.extensions["rate_service"] = service
    return service
