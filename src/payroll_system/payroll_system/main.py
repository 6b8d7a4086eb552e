from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import SCHEMA_PATH, SEED_PATH, apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=SEED_PATH)
            logger.info("seed data ready")

        container = build_container(
            db_config=db_config,
            rates=getattr(settings, "PAYROLL_RATES", None),
            work_day_policy=getattr(settings, "PAYROLL_WORK_DAY_POLICY", "COUNT_ALL_RECORDS"),
            page_limit=int(getattr(settings, "PAGE_LIMIT", 20)),
        )

    app.extensions["payroll_container"] = container
    register_payroll(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
