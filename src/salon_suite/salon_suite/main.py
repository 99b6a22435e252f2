from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .capacity.controller import register as register_capacity
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .kiosk.controller import register as register_kiosk
from .meetings.controller import register as register_meetings
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules
from .staffing.controller import register as register_staffing
from .staffing.model import StaffingThresholds
from .swaps.controller import register as register_swaps
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _thresholds(settings) -> StaffingThresholds:
    return StaffingThresholds(
        under_ratio=float(getattr(settings, "STAFFING_UNDER_RATIO", StaffingThresholds.under_ratio)),
        over_ratio=float(getattr(settings, "STAFFING_OVER_RATIO", StaffingThresholds.over_ratio)),
        target_ratio=float(getattr(settings, "STAFFING_TARGET_RATIO", StaffingThresholds.target_ratio)),
    )


def register_controllers(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_schedules(app, container)
    register_capacity(app, container)
    register_staffing(app, container)
    register_meetings(app, container)
    register_kiosk(app, container)
    register_payroll(app, container)
    register_swaps(app, container)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a prebuilt `container` skips all database setup (used by tests).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["KIOSK_BASE_URL"] = getattr(settings, "KIOSK_BASE_URL", "http://localhost:5000")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            kiosk_idle_seconds=int(getattr(settings, "KIOSK_IDLE_SECONDS", 60)),
            thresholds=_thresholds(settings),
        )

    register_controllers(app, container)
    return app
