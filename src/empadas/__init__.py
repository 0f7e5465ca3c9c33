"""Empadas da Lia application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify, request

from . import cli as _cli
from .config import BaseConfig, DevConfig, ProductionConfig, TestConfig
from .errors import AppError
from .extensions import Services, init_services
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProductionConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "empadas.blueprints.rpc"
    yield "empadas.blueprints.finance"
    yield "empadas.blueprints.health"


def create_app(config_name: str | None = None, *, services: Services | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    config_cls = _resolve_config(config_name)
    config_obj = services.config if services is not None else config_cls()
    app.config.from_object(config_obj)
    app.config["EMPADAS_CONFIG"] = config_obj
    app.json.ensure_ascii = False

    setup_logging(config_obj)
    init_services(app, services)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.http_status >= 500:
            logger.error("Request failed", extra={"code": exc.code, "path": request.path})
        path = (request.view_args or {}).get("procedure")
        body = {
            "error": {
                "message": exc.message,
                "code": exc.code,
                "data": {**exc.to_dict(), "path": path},
            }
        }
        return jsonify(body), exc.http_status


__all__ = ["BaseConfig", "DevConfig", "ProductionConfig", "Services", "TestConfig", "create_app"]
