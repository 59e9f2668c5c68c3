"""
SpotiHooks Companion Application
Flask app exposing the Web API facade to browser callers.
"""

import logging
import os
import time
from typing import Optional

from flask import Flask, Response, g, request

from .api.http import RequestsTransport, Transport
from .config import load_config
from .config_schema import SpotiHooksConfig
from .routes import catalog_bp, player_bp
from .routes.errors import register_error_handlers
from .routes.helpers import EXTENSION_KEY
from .utils.logger import configure_logging, setup_logger
from .utils.perf_monitor import ObservabilitySink, PerfMonitor
from .version import get_app_info


def create_app(
    config: Optional[SpotiHooksConfig] = None,
    *,
    transport: Optional[Transport] = None,
    result_timeout: Optional[float] = None,
) -> Flask:
    """Return a freshly constructed Flask application.

    Args:
        config: Validated configuration; loaded from disk/env when omitted
        transport: Transport shared by all per-request clients
        result_timeout: Seconds to wait for an upstream response (None = no limit)
    """
    config = config or load_config()
    configure_logging(config.log_level, config.json_logs)
    logger = setup_logger("spotihooks.app")
    monitor = PerfMonitor(logging.getLogger("spotihooks.perf"))

    if transport is None:
        transport = RequestsTransport.from_config(
            config,
            sink=ObservabilitySink(logging.getLogger("spotify.http"), monitor),
        )

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = {
        "config": config,
        "transport": transport,
        "monitor": monitor,
        "result_timeout": result_timeout,
    }

    app.register_blueprint(player_bp)
    app.register_blueprint(catalog_bp)
    register_error_handlers(app)

    @app.before_request
    def _perf_before_request():
        """Capture request start timestamp for perf monitoring."""
        g.perf_started = time.perf_counter()

    @app.after_request
    def after_request(response: Response):
        """Add CORS headers and record route timings."""
        allowed_origin = os.getenv("SPOTIHOOKS_CORS_ORIGIN")
        if allowed_origin:
            response.headers["Access-Control-Allow-Origin"] = allowed_origin
            response.headers.setdefault("Vary", "Origin")
        response.headers["Access-Control-Allow-Headers"] = "Content-Type,Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET,PUT,POST,OPTIONS"

        start = getattr(g, "perf_started", None)
        if start is not None:
            route_name = request.endpoint or request.path
            monitor.record_block(f"route.{request.method.lower()}.{route_name}", time.perf_counter() - start)
        return response

    logger.info("🎵 %s app created (environment=%s)", get_app_info(), config.environment)
    return app


__all__ = ["create_app"]
