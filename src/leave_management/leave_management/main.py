from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .activity.controller import register as register_activity
from .assignments.controller import register as register_assignments
from .common.http import json_error
from .container import Container, build_container
from .core.constants import DEFAULT_RECENT_DAYS, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.config["RECENT_DAYS"] = int(getattr(settings, "RECENT_DAYS", DEFAULT_RECENT_DAYS))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)

        container = build_container(
            db_config=db_config,
            log_activity=bool(getattr(settings, "ACTIVITY_LOG_ENABLED", True)),
            strict_review=bool(getattr(settings, "STRICT_REVIEW", True)),
        )

    register_users(app, container)
    register_assignments(app, container)
    register_leaves(app, container)
    register_activity(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return json_error("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return json_error("Method not allowed", 405)

    return app
