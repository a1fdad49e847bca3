"""Application factory and app-wide configuration."""

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from decisionsim.app.api.routes import STORE_EXTENSION, api_bp
from decisionsim.app.config import DefaultConfig
from decisionsim.domain.store import RecordStore


def configure_logging(level: str) -> logging.Logger:
    """Attach a console handler to the package logger (once per process)."""
    logger = logging.getLogger("decisionsim")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
    return logger


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("DECISIONSIM")
    if config:
        app.config.update(config)

    configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    db_path = app.config["DATABASE_PATH"] or Path(app.instance_path) / "decisionsim.db"
    store = RecordStore(db_path)
    store.init_db()
    app.extensions[STORE_EXTENSION] = store

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
