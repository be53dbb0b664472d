from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .common.errors import register_error_handlers
from .common.responses import ok
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .reports.controller import register as register_reports
from .tags.controller import register as register_tags
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    origins = [o.strip() for o in str(getattr(settings, "CORS_ORIGINS", "")).split(",") if o.strip()]
    CORS(app, origins=origins or "*", supports_credentials=True)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            getattr(settings, "APP_TIMEZONE", None),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(settings=settings)
        if container.conn is not None:
            atexit.register(container.conn.close)

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_analytics(app, container)
    register_tags(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"status": "ok"})

    return app
