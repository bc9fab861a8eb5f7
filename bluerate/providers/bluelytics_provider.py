"""Bluelytics provider implementation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from .base import BaseRateProvider, UpstreamError
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .schemas import Rate

DEFAULT_BASE_URL = "https://api.bluelytics.com.ar/v2"


class BluelyticsProvider(BaseRateProvider):
    """Provider that fetches blue dollar quotes from the Bluelytics API."""

    name = "bluelytics"
    display_name = "Bluelytics API"

    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> BluelyticsProvider:
        base_url_value = config.get("BLUELYTICS_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        timeout = float(config.get("REQUEST_TIMEOUT_SECONDS", 5))
        return cls(HTTPClient(HTTPClientConfig(base_url=base_url, timeout=timeout)))

    def get_latest(self) -> Rate:
        payload = self._fetch("/latest")
        try:
            value_sell = payload["blue"]["value_sell"]
            last_update = payload["last_update"]
        except (KeyError, TypeError) as exc:
            raise UpstreamError("Unexpected response payload from Bluelytics /latest") from exc
        if not isinstance(last_update, str) or not last_update.strip():
            raise UpstreamError("Unexpected response payload from Bluelytics /latest")
        return self._build_rate(value_sell, last_update)

    def get_historical(self, day: date) -> Rate:
        requested = day.isoformat()
        payload = self._fetch("/historical", params={"day": requested})
        try:
            value_sell = payload["blue"]["value_sell"]
        except (KeyError, TypeError) as exc:
            raise UpstreamError("Unexpected response payload from Bluelytics /historical") from exc
        # The requested day is authoritative; upstream date fields are ignored.
        return self._build_rate(value_sell, requested)

    def _fetch(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        try:
            return self._client.get(path, params=params)
        except HTTPClientError as exc:
            raise UpstreamError(f"Bluelytics request failed: {exc}", status_code=exc.status_code) from exc

    @staticmethod
    def _build_rate(value_sell: Any, rate_date: str) -> Rate:
        try:
            return Rate(value_sell=value_sell, date=rate_date)
        except ValueError as exc:
            raise UpstreamError(f"Invalid rate returned by Bluelytics: {exc}") from exc
