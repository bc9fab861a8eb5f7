"""Provider interfaces and data structures for blue dollar rate sources."""

from .base import BaseRateProvider, UpstreamError
from .bluelytics_provider import BluelyticsProvider
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .mock import MockRateProvider
from .schemas import Rate

__all__ = [
    "BaseRateProvider",
    "BluelyticsProvider",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "MockRateProvider",
    "Rate",
    "UpstreamError",
]
