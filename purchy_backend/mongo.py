# purchy_backend/mongo.py
from __future__ import annotations

from flask import current_app
from flask_pymongo import PyMongo
from pymongo.errors import PyMongoError

from purchy_backend.services.purchy.purchy_service import PurchyService

EXTENSION_KEY = "purchy_service"


def _connect(app):
    """
    Opens the shared client through Flask-PyMongo and pings the server.
    An unreachable database is fatal: log and exit(1).
    """
    mongo = PyMongo()
    try:
        mongo.init_app(app, serverSelectionTimeoutMS=app.config["MONGO_TIMEOUT_MS"])
        mongo.cx.admin.command("ping")
    except PyMongoError as e:
        app.logger.critical("MongoDB connection error: %s", e)
        raise SystemExit(1)

    app.logger.info("Connected to MongoDB")
    return mongo.cx, mongo.db


def init_mongo(app, client=None) -> PurchyService:
    """
    Builds the PurchyService once per app and stores it in app.extensions.
    Pass `client` (any pymongo-compatible client) to skip the real connection.
    """
    db = None
    if client is None:
        client, db = _connect(app)

    if db is None:
        db = client[app.config["MONGO_DBNAME"]]

    service = PurchyService.from_db(db)
    service.ensure_indexes()
    app.extensions[EXTENSION_KEY] = service
    return service


def get_purchy_service() -> PurchyService:
    return current_app.extensions[EXTENSION_KEY]
