"""Registry and factory for rate providers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List

from .base import BaseRateProvider

ProviderFactory = Callable[[Mapping[str, Any]], BaseRateProvider]

_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {}


class UnknownProviderError(LookupError):
    """Raised when no factory is registered under the requested name."""


def _default_factories() -> Iterable[tuple[str, ProviderFactory]]:
    from .bluelytics_provider import BluelyticsProvider
    from .mock import MockRateProvider

    return [
        (BluelyticsProvider.name, BluelyticsProvider.from_config),
        (MockRateProvider.name, lambda _config: MockRateProvider()),
    ]


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under the given name."""

    if not name:
        raise ValueError("Provider name cannot be empty.")
    _PROVIDER_FACTORIES[name.lower()] = factory


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""

    return sorted(_PROVIDER_FACTORIES.keys())


def _resolve_name(name: str | None = None) -> str:
    return (name or os.getenv("RATE_PROVIDER") or "bluelytics").lower()


def get_provider(name: str | None = None, config: Mapping[str, Any] | None = None) -> BaseRateProvider:
    """Instantiate a provider using the supplied or configured name."""

    provider_name = _resolve_name(name)
    try:
        factory = _PROVIDER_FACTORIES[provider_name]
    except KeyError as exc:
        available = ", ".join(list_providers()) or "none registered"
        raise UnknownProviderError(
            f"Unknown provider '{provider_name}'. Available providers: {available}"
        ) from exc
    return factory(config or {})


def init_provider(app) -> BaseRateProvider:
    """Attach the configured provider to the Flask app."""

    provider = get_provider(app.config.get("RATE_PROVIDER"), app.config)
    app.extensions["rate_provider"] = provider
    return provider


def reset_registry(default_factories: Iterable[tuple[str, ProviderFactory]] | None = None) -> None:
    """Reset provider registry; useful for tests."""

    _PROVIDER_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_provider(name, factory)


reset_registry()
