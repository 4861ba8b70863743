from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_local
from .container import Container, build_container
from .ledger.seed import seed_demo_logs
from .reports.controller import register as register_reports
from .storage.port import KeyValueStorage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, storage: Optional[KeyValueStorage] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s storage=%s", settings_module, getattr(settings, "STORAGE_BACKEND", "memory"))

    container = build_container(settings, storage=storage)
    app.extensions["ledger"] = container

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_logs(container.store, now_local().date())

    @app.before_request
    def poll_storage_changes():
        # Pull-based backends announce other sessions' writes here.
        container.storage.poll_changes()

    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["ledger"]
