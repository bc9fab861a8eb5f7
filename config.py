"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_RATE_PROVIDERS = {"bluelytics", "mock"}
PROVIDER_ALIASES = {"bluelytics_api": "bluelytics"}


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "blue-rate"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "5"))
    RATE_PROVIDER = _get_env("RATE_PROVIDER", "bluelytics")
    BLUELYTICS_API_BASE_URL = _get_env("BLUELYTICS_API_BASE_URL", "https://api.bluelytics.com.ar/v2")
    LATEST_CACHE_TTL_SECONDS = int(_get_env("LATEST_CACHE_TTL_SECONDS", "900"))
    HISTORICAL_CACHE_TTL_SECONDS = int(_get_env("HISTORICAL_CACHE_TTL_SECONDS", "86400"))
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test suite; never talks to the network."""

    DEBUG = False
    TESTING = True
    RATE_PROVIDER = "mock"


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the provider or cache settings are invalid.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_provider(config_cls)
    _validate_cache_ttls(config_cls)
    return config_cls


def _validate_provider(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_provider(config_cls.RATE_PROVIDER)
    if normalized not in SUPPORTED_RATE_PROVIDERS:
        raise ValueError(
            f"Unsupported RATE_PROVIDER '{config_cls.RATE_PROVIDER}'. "
            f"Allowed values: {sorted(SUPPORTED_RATE_PROVIDERS)}"
        )
    config_cls.RATE_PROVIDER = normalized


def _validate_cache_ttls(config_cls: type[BaseConfig]) -> None:
    for key in ("LATEST_CACHE_TTL_SECONDS", "HISTORICAL_CACHE_TTL_SECONDS"):
        if getattr(config_cls, key) <= 0:
            raise ValueError(f"{key} must be a positive number of seconds")


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
