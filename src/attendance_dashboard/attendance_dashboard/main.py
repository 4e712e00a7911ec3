from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.logging_config import configure_logging
from .container import build_container
from .core.exceptions import NotFoundError, ValidationError
from .store.entity_store import EntityStore
from .attendance.controller import register as register_attendance
from .courses.controller import register as register_courses
from .members.controller import register as register_members
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(store: Optional[EntityStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s", settings_module)

    container = build_container(settings=settings, store=store)
    app.extensions["attendance_dashboard"] = container

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    register_users(app, container)
    register_members(app, container)
    register_courses(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
