# purchy_backend/app_config.py

import os


def load_config(app):
    """
    Load all Flask configuration in a clean centralized way.
    """
    # ------------------------------
    # Mongo
    # ------------------------------
    app.config["MONGO_URI"] = os.getenv(
        "MONGO_URI",
        "mongodb://localhost:27017/purchy_db"
    )
    # used when MONGO_URI does not name a database
    app.config["MONGO_DBNAME"] = os.getenv("MONGO_DBNAME", "purchy_db")
    app.config["MONGO_TIMEOUT_MS"] = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    # ------------------------------
    # Server
    # ------------------------------
    app.config["PORT"] = int(os.getenv("PORT", "3000"))
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO").upper()

    # ------------------------------
    # Login credentials
    # ------------------------------
    app.config["LOGIN_USERNAME"] = os.getenv("LOGIN_USERNAME") or os.getenv("USERNAME")
    app.config["LOGIN_PASSWORD"] = os.getenv("LOGIN_PASSWORD") or os.getenv("PASSWORD")
