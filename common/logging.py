"""Logging helpers with request correlation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from flask import Flask, g, request

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "helixplot"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the ``helixplot`` hierarchy.

    Only the root ``helixplot`` logger owns a handler; children such as
    ``helixplot.sampler`` propagate to it.
    """

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)


def configure_logging(level: str | int | None) -> None:
    """Apply the ``site.log_level`` setting; unknown names are ignored."""

    if level is None:
        return
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            get_logger().warning("unknown log level %r", level)
            return
        level = resolved
    get_logger().setLevel(level)


def _request_context() -> dict[str, Any]:
    return {
        "request_id": getattr(g, "request_id", "-"),
        "path": request.path,
        "method": request.method,
    }


def install_request_logging(app: Flask) -> None:
    logger = get_logger(f"{ROOT_LOGGER}.request")

    @app.before_request
    def _begin_request() -> None:  # pragma: no cover - flask hooks
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):  # pragma: no cover - flask hooks
        duration_ms = 0.0
        if hasattr(g, "request_started"):
            duration_ms = (time.perf_counter() - g.request_started) * 1000
        context = _request_context()
        logger.info(
            "%s %s -> %s (%.2f ms)",
            context["method"],
            context["path"],
            response.status_code,
            duration_ms,
            extra={**context, "status": response.status_code, "duration_ms": round(duration_ms, 2)},
        )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response

    @app.teardown_request
    def _teardown_request(exc):  # pragma: no cover - flask hooks
        if exc is not None:
            logger.exception("request error", extra=_request_context(), exc_info=exc)


__all__ = ["get_logger", "configure_logging", "install_request_logging"]
