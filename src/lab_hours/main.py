from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request
from flask_socketio import SocketIO

from .auth import gate
from .auth.controller import register as register_auth
from .config import get_settings_module
from .container import build_container
from .core.exceptions import AuthenticationError, DomainError
from .database.bootstrap import init_schema
from .extensions import db
from .lab_sessions.controller import register as register_lab_sessions
from .mentors.controller import register as register_mentors
from .reports.controller import register as register_reports
from .sms.controller import register as register_sms
from .students.controller import register as register_students
from .tags.controller import register as register_tags

logger = logging.getLogger(__name__)

PLAIN_TEXT = {"Content-Type": "text/plain; charset=utf-8"}


def _configure_logging(level: str) -> None:
    logging.basicConfig(format="[%(asctime)s] %(levelname)s %(name)s: %(message)s", level=level)
    logging.getLogger("lab_hours").setLevel(level)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, AuthenticationError):
            logger.error("Members service failure on %s: %s", request.path, e)
        else:
            logger.warning("Rejected %s %s (%d): %s", request.method, request.path, e.http_status, e)
        return str(e), e.http_status, PLAIN_TEXT


def create_app(settings_module: Optional[str] = None, *, members_client=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    app.config.from_object(importlib.import_module(settings_module))
    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger.info("Starting lab hours with settings=%s", settings_module)

    db.init_app(app)
    socketio = SocketIO(app, async_mode=app.config.get("SOCKETIO_ASYNC_MODE", "threading"))

    container = build_container(config=app.config, members_client=members_client)
    app.extensions["lab_hours"] = container

    gate.install(app, container.members_client)
    _register_error_handlers(app)

    register_auth(app)
    register_lab_sessions(app, container)
    register_students(app, container)
    register_mentors(app, container)
    register_sms(app, container)
    register_reports(app, container)
    register_tags(app, container, socketio)

    if app.config.get("AUTO_INIT_DB"):
        with app.app_context():
            init_schema()

    return app


def run() -> None:
    app = create_app()
    socketio = app.extensions["socketio"]
    socketio.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config.get("DEBUG", False),
        allow_unsafe_werkzeug=True,
    )


if __name__ == "__main__":
    run()
