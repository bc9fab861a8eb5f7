"""Application factory for the blue dollar rate service."""

from __future__ import annotations

from flask import Flask
from flask_smorest import Api

from config import get_config
from .cli import register_cli


def create_app(config_name: str | None = None) -> Flask:
    """Application factory adhering to the Flask app factory pattern."""

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    _configure_logging(app)
    _configure_api(app)
    api = _register_extensions(app)
    _register_blueprints(app, api)
    _register_error_handlers(app)

    register_cli(app)
    return app


def _configure_logging(app: Flask) -> None:
    from .logging import init_request_logging, setup_logging

    setup_logging(app)
    init_request_logging(app)


def _configure_api(app: Flask) -> None:
    app.config.setdefault("API_TITLE", "Blue Rate API")
    app.config.setdefault("API_VERSION", "v1")
    app.config.setdefault("OPENAPI_VERSION", "3.0.3")
    app.config.setdefault("OPENAPI_URL_PREFIX", "/docs")
    app.config.setdefault("OPENAPI_SWAGGER_UI_PATH", "/")
    app.config.setdefault(
        "OPENAPI_SWAGGER_UI_URL",
        "https://cdn.jsdelivr.net/npm/swagger-ui-dist/",
    )


def _register_extensions(app: Flask) -> Api:
    """Build the provider, cache and rate service, then the smorest Api."""

    from .providers.registry import init_provider
    from .services import init_rate_service

    init_provider(app)
    init_rate_service(app)

    api = Api(app)
    app.extensions["smorest_api"] = api
    return api


def _register_blueprints(app: Flask, api: Api) -> None:
    """Register Flask blueprints."""

    from .exchange_rate import blp as exchange_rate_blp
    from .health import blp as health_blp

    api.register_blueprint(health_blp, url_prefix="/health")
    api.register_blueprint(exchange_rate_blp, url_prefix="/api/exchange-rate")


def _register_error_handlers(app: Flask) -> None:
    """Register global error handlers."""

    from .errors import register_error_handlers

    register_error_handlers(app)
