#!/usr/bin/env python3
"""
SpotiHooks Runner - Serves the companion Flask application
"""

import os

from waitress import serve

from spotihooks.app import create_app
from spotihooks.config import load_config
from spotihooks.utils.logger import setup_logger

if __name__ == "__main__":
    logger = setup_logger("runner")
    config = load_config()

    # Determine port based on environment
    if config.environment == "production":
        default_port = 5000
    else:
        default_port = 5001

    port = int(os.environ.get("PORT", default_port))
    host = os.environ.get("HOST", "0.0.0.0")
    debug_mode = os.environ.get("SPOTIHOOKS_DEBUG", "0") == "1"

    app = create_app(config)

    logger.info(f"🚀 Starting SpotiHooks on {host}:{port}")
    logger.info(f"🌍 Environment: {config.environment}")
    logger.info(f"🔧 Debug mode: {debug_mode}")

    if debug_mode:
        app.run(host=host, port=port, debug=True)
    else:
        threads = int(os.environ.get("SPOTIHOOKS_WAITRESS_THREADS", "4"))
        logger.info(f"🍽️ Using Waitress WSGI server (threads={threads})")
        serve(app, host=host, port=port, threads=threads)
