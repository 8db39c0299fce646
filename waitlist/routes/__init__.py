# =============================================================================
# File: waitlist/routes/__init__.py
# Purpose: Register the API blueprints.
# =============================================================================
from __future__ import annotations

from flask import Flask

from .api_waitlist import bp as waitlist_bp
from .api_contact import bp as contact_bp
from .api_misc import bp as misc_bp

def register_routes(app: Flask) -> None:
    """Mount every API blueprint under /api."""
    app.register_blueprint(waitlist_bp, url_prefix="/api")
    app.register_blueprint(contact_bp,  url_prefix="/api")
    app.register_blueprint(misc_bp,     url_prefix="/api")
