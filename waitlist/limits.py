# =============================================================================
# File: waitlist/limits.py
# Purpose: Per-client request throttling for the public API (Flask-Limiter).
# =============================================================================
from __future__ import annotations

from flask import Flask, current_app, jsonify
from flask_limiter import Limiter
from flask_limiter.errors import RateLimitExceeded
from flask_limiter.util import get_remote_address

MSG_WAITLIST_LIMIT = "Too many submissions. Please try again later."
MSG_CONTACT_LIMIT = "Too many requests. Please try again later."

limiter = Limiter(key_func=get_remote_address)


def waitlist_limit() -> str:
    return current_app.config["WAITLIST_RATE_LIMIT"]


def contact_limit() -> str:
    return current_app.config["CONTACT_RATE_LIMIT"]


def setup_rate_limit(app: Flask) -> None:
    """Bind the limiter to `app` and answer 429 as JSON."""
    app.config.setdefault("RATELIMIT_HEADERS_ENABLED", True)
    limiter.init_app(app)

    @app.errorhandler(RateLimitExceeded)
    def _ratelimit_handler(exc: RateLimitExceeded):
        return jsonify({"error": exc.description}), 429
