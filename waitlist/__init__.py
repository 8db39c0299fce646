# waitlist/__init__.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import load_settings, require_mail_settings
from .frontend import frontend_bp
from .limits import setup_rate_limit
from .mirror import build_mirror
from .notifier import ResendNotifier
from .routes import register_routes
from .store import WaitlistStore

log = logging.getLogger(__name__)


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    *,
    store: Optional[WaitlistStore] = None,
    notifier=None,
    mirror=None,
) -> Flask:
    """
    Build the Flask app.

    `config` overrides environment settings. `store`, `notifier` and `mirror`
    replace the collaborators built from settings (tests inject fakes here).
    Raises ConfigError when mail credentials are missing and no notifier is
    given.
    """
    settings = load_settings(config)

    app = Flask(__name__)
    app.config.update(settings)
    _configure_logging(app.config["LOG_LEVEL"])

    if app.config["TRUST_PROXY"]:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # ===== Collaborators, chosen once at start-up =====
    if notifier is None:
        require_mail_settings(settings)
        notifier = ResendNotifier(settings["RESEND_API_KEY"], settings["MAIL_FROM"])
    if store is None:
        store = WaitlistStore(settings["DATA_FILE"])
    store.ensure()
    if mirror is None:
        mirror = build_mirror(settings)

    app.extensions["waitlist.store"] = store
    app.extensions["waitlist.notifier"] = notifier
    app.extensions["waitlist.mirror"] = mirror
    # ==================================================

    setup_rate_limit(app)
    register_routes(app)
    app.register_blueprint(frontend_bp)
    _register_error_handlers(app)

    return app


def _configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            format="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
        )
    root.setLevel(str(level).upper())


def _register_error_handlers(app: Flask) -> None:
    """JSON errors on /api/*, plain text elsewhere."""

    @app.errorhandler(404)
    def _json_404(err):
        if request.path.startswith("/api/"):
            return jsonify(error="not_found"), 404
        return "Not Found", 404

    @app.errorhandler(405)
    def _json_405(err):
        if request.path.startswith("/api/"):
            resp = jsonify(error="method_not_allowed")
            allow = getattr(err, "valid_methods", None)
            if allow:
                resp.headers["Allow"] = ", ".join(allow)
            return resp, 405
        return "Method Not Allowed", 405

    @app.errorhandler(Exception)
    def _unhandled(err):
        if isinstance(err, HTTPException):
            return err
        log.exception("Unhandled error")
        if request.path.startswith("/api/"):
            return jsonify(error="Internal server error"), 500
        return "Internal Server Error", 500
