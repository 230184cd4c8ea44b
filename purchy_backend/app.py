# purchy_backend/app.py

from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS

from purchy_backend.app_config import load_config
from purchy_backend.mongo import init_mongo
from purchy_backend.register_blueprints import register_all_blueprints


def create_app(config=None, mongo_client=None):
    """
    config: overrides applied on top of the environment.
    mongo_client: pymongo-compatible client to use instead of MONGO_URI.
    """
    app = Flask(__name__)

    # -------------------------
    # Config & logging
    # -------------------------
    load_config(app)
    if config:
        app.config.update(config)
    level = logging.getLevelName(str(app.config["LOG_LEVEL"]).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    app.logger.info("Config loaded")

    CORS(app, resources={r"/*": {"origins": "*"}})

    # -------------------------
    # Mongo
    # -------------------------
    init_mongo(app, client=mongo_client)

    # -------------------------
    # Blueprints
    # -------------------------
    register_all_blueprints(app)

    @app.errorhandler(500)
    def _internal_error(e):
        original = getattr(e, "original_exception", None) or e
        app.logger.error("Unhandled error: %s", original, exc_info=original)
        return "Something broke!", 500

    return app
