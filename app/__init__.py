"""Application factory for the HelixPlot server."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterable

import yaml
from flask import Flask

from common.errors import (
    AppError,
    MethodNotAllowedAppError,
    NotFoundAppError,
    PayloadTooLargeAppError,
    ValidationAppError,
    ensure_app_error,
)
from common.logging import configure_logging, get_logger, install_request_logging
from common.responses import fail, ok

from . import config as config_module
from .blueprints import register_plugin_blueprints

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"

logger = get_logger("helixplot.app")


def _load_yaml_config() -> dict:
    if not CONFIG_PATH.exists():
        return {}
    with CONFIG_PATH.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _discover_plugins(package: str = "plugins") -> Iterable[str]:
    """Yield import paths for all plugin packages."""

    package_path = Path(__file__).resolve().parent.parent / package
    if not package_path.exists():
        return []
    for module_info in pkgutil.iter_modules([str(package_path)]):
        if module_info.ispkg:
            yield f"{package}.{module_info.name}"


def _load_manifests() -> list[dict[str, str]]:
    manifests: list[dict[str, str]] = []
    for dotted in _discover_plugins():
        module = importlib.import_module(dotted)
        manifest = getattr(module, "manifest", None)
        if manifest:
            manifests.append(dict(manifest))
    manifests.sort(key=lambda item: item["title"].lower())
    return manifests


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_module.BaseConfig)

    yaml_config = _load_yaml_config()
    site_settings = yaml_config.get("site", {})
    plugin_settings = yaml_config.get("plugins", {})

    if site_settings:
        app.config["SITE_SETTINGS"] = site_settings
        if "max_content_length_mb" in site_settings:
            try:
                max_bytes = int(float(site_settings["max_content_length_mb"]) * 1024 * 1024)
                app.config["MAX_CONTENT_LENGTH"] = max_bytes
            except (TypeError, ValueError):
                logger.warning("ignoring invalid max_content_length_mb: %r", site_settings["max_content_length_mb"])
    else:
        app.config["SITE_SETTINGS"] = {}

    app.config["PLUGIN_SETTINGS"] = plugin_settings
    configure_logging(app.config["SITE_SETTINGS"].get("log_level"))

    if config_name:
        config_obj = getattr(config_module, config_name, None)
        if config_obj:
            app.config.from_object(config_obj)

    register_plugin_blueprints(app)
    install_request_logging(app)

    @app.after_request
    def apply_response_headers(response):
        """Attach strict security headers to every outgoing response."""

        configured = app.config.get("RESPONSE_HEADERS", {})
        for header, value in configured.items():
            if header not in response.headers:
                response.headers[header] = value
        return response

    manifests = _load_manifests()
    for manifest in manifests:
        blueprint = manifest.get("blueprint")
        plugin_config = plugin_settings.get(blueprint, {}) if blueprint else {}
        if plugin_config.get("docs"):
            manifest["docs"] = plugin_config["docs"]
        if plugin_config.get("summary"):
            manifest["summary"] = plugin_config["summary"]
    app.config["PLUGIN_MANIFESTS"] = manifests

    @app.route("/")
    def home():
        site_config = app.config.get("SITE_SETTINGS", {})
        return ok(
            {
                "name": site_config.get("name", "HelixPlot"),
                "plugins": app.config.get("PLUGIN_MANIFESTS", []),
            }
        )

    @app.errorhandler(AppError)
    def app_error(error: AppError):
        return fail(error)

    @app.errorhandler(400)
    def bad_request(error):  # pragma: no cover - simple envelope
        return fail(ValidationAppError(message="Bad request", code="bad_request"))

    @app.errorhandler(404)
    def not_found(error):
        return fail(NotFoundAppError(message="Resource not found"))

    @app.errorhandler(405)
    def method_not_allowed(error):
        return fail(MethodNotAllowedAppError(message="Method not allowed"))

    @app.errorhandler(413)
    def payload_too_large(error):  # pragma: no cover
        return fail(PayloadTooLargeAppError(message="Request payload too large"))

    @app.errorhandler(500)
    def server_error(error):  # pragma: no cover
        return fail(ensure_app_error(getattr(error, "original_exception", None)))

    return app


__all__ = ["create_app"]
