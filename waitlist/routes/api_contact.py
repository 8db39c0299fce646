# waitlist/routes/api_contact.py
import logging

from flask import Blueprint, current_app, jsonify

from waitlist.errors import NotifyError, ValidationError
from waitlist.intake import share_contact
from waitlist.limits import MSG_CONTACT_LIMIT, contact_limit, limiter
from waitlist.routes.payload import request_fields

log = logging.getLogger(__name__)

bp = Blueprint("contact_api", __name__)


# -----------------------------------------------------------------
# Contact share
# -----------------------------------------------------------------
@bp.post("/contact")
@limiter.limit(contact_limit, error_message=MSG_CONTACT_LIMIT)
def send_contact():
    """Email the contact card, then log the request to Firestore."""
    try:
        share_contact(
            request_fields(),
            notifier=current_app.extensions["waitlist.notifier"],
            mirror=current_app.extensions["waitlist.mirror"],
        )
    except ValidationError as e:
        return jsonify({"error": e.reason}), 400
    except NotifyError as e:
        log.error("Email error: %s", e)
        return jsonify({"error": "Failed to send email. Please try again."}), 500

    return jsonify({"success": True})
