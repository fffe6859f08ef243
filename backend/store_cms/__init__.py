from flask import Flask
from .config import config_by_name
from .extensions import db, migrate


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)

    # -------------------------------------------------
    # Models (registered on db.metadata for create_all / migrations)
    # -------------------------------------------------
    from .models import audit_log, page, page_store, page_version, store  # noqa: F401

    return app
