# waitlist/frontend.py
"""
Public pages:
- / : installer waitlist form
- /contact : contact-share form
- /qr : printable QR codes for the two pages above
"""

import logging

from flask import Blueprint, current_app, render_template

from .qr import qr_data_url
from .validation import EMAIL_PATTERN

log = logging.getLogger(__name__)

frontend_bp = Blueprint("frontend", __name__)


@frontend_bp.get("/")
def waitlist_page():
    return render_template("waitlist.html", email_pattern=EMAIL_PATTERN)


@frontend_bp.get("/contact")
def contact_page():
    return render_template("contact.html", email_pattern=EMAIL_PATTERN)


@frontend_bp.get("/qr")
def qr_page():
    """Two QR codes, one per public page, built from BASE_URL."""
    base_url = current_app.config["BASE_URL"]
    try:
        waitlist_qr = qr_data_url(f"{base_url}/")
        contact_qr = qr_data_url(f"{base_url}/contact")
    except Exception:  # noqa: BLE001
        log.exception("QR error")
        return "Error generating QR codes", 500

    return render_template(
        "qr.html",
        waitlist_qr=waitlist_qr,
        contact_qr=contact_qr,
        base_url=base_url,
    )
