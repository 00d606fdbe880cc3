from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .client_data.controller import register as register_client_data
from .container import Container, build_container
from .dashboards.controller import register as register_dashboards
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .evaluations.controller import register as register_evaluations
from .fixtures.seed import seed_storage
from .notifications.controller import register as register_notifications
from .registrations.controller import register as register_registrations
from .suspensions.controller import register as register_suspensions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORAGE_BACKEND", "memory")
    db_config = dict(getattr(settings, "DB_CONFIG", {}))
    logger.info("settings=%s storage=%s", settings_module, backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    if container is None:
        container = build_container(
            storage_backend=backend,
            storage_path=getattr(settings, "STORAGE_PATH", None),
            db_config=db_config,
            fixtures_dir=getattr(settings, "FIXTURES_DIR", None),
        )

    if bool(getattr(settings, "AUTO_SEED_STORAGE", True)):
        seed_storage(container.storage, container.fixtures)

    app.extensions["evaluation_container"] = container

    register_users(app, container)
    register_employees(app, container)
    register_evaluations(app, container)
    register_suspensions(app, container)
    register_registrations(app, container)
    register_notifications(app, container)
    register_dashboards(app, container)
    register_client_data(app, container)

    return app
