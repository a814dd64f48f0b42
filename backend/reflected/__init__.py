from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask
from flask_cors import CORS

from .config import get_config, load_environment
from .routes import register_routes


def create_app(config_name: str | None = None, overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory so tests and the dev server share consistent setup."""
    load_environment()

    # Static files are served by static_routes from STATIC_FOLDER
    app = Flask(__name__, static_folder=None)

    config_cls = get_config(config_name)
    app.config.from_object(config_cls())
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(logging.DEBUG if app.config.get("DEBUG") else logging.INFO)

    CORS(app, resources={r"/api/*": {"origins": "*"}})
    register_routes(app)

    app.logger.info(
        "Reflected app ready (groq=%s, huggingface=%s)",
        bool(app.config.get("GROQ_API_KEY")),
        bool(app.config.get("HUGGINGFACE_API_KEY")),
    )
    return app
