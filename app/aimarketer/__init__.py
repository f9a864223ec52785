import logging
import os
from collections.abc import Mapping
from typing import Any

from cachelib.file import FileSystemCache
from flask import Flask, g, render_template, request
from flask_session import Session
from dotenv import load_dotenv

from app.aimarketer.config import load_config
from app.aimarketer.db import create_schema, init_db, teardown_db_session
from app.aimarketer.pages import render_page
from app.aimarketer.routes import bp as routes_bp
from app.aimarketer.auth import bp as auth_bp, load_current_user
from app.aimarketer.modules.feedback.admin import bp as feedback_bp


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """
    Build the site. `overrides` wins over the environment so callers (tests,
    embedders) can hand in the database URL and session secret explicitly.
    """
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    if overrides:
        app.config.from_mapping(overrides)

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    # Server-side session store; logout deletes the record, not just the cookie.
    if app.config.get("SESSION_CACHELIB") is None:
        # threshold=0: never prune live sessions to make room
        app.config["SESSION_CACHELIB"] = FileSystemCache(cache_dir=app.config["SESSION_FILE_DIR"], threshold=0)
    Session(app)

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    if app.config.get("DB_AUTO_CREATE"):
        create_schema(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(feedback_bp)

    app.before_request(load_current_user)
    app.teardown_appcontext(teardown_db_session)

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        return render_page("errors/404.html"), 404

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        rid = getattr(g, "request_id", None)
        app.logger.exception("Unhandled 500 (request_id=%s path=%s)", rid, request.path)
        return render_template("errors/500.html", request_id=rid), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
