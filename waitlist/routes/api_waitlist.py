# waitlist/routes/api_waitlist.py
import logging

from flask import Blueprint, current_app, jsonify

from waitlist.errors import StoreError, ValidationError
from waitlist.intake import submit_waitlist
from waitlist.limits import MSG_WAITLIST_LIMIT, limiter, waitlist_limit
from waitlist.routes.payload import request_fields

log = logging.getLogger(__name__)

bp = Blueprint("waitlist_api", __name__)


# -----------------------------------------------------------------
# Waitlist submission
# -----------------------------------------------------------------
@bp.post("/waitlist")
@limiter.limit(waitlist_limit, error_message=MSG_WAITLIST_LIMIT)
def join_waitlist():
    """Validate, store locally, mirror to Firestore."""
    try:
        submit_waitlist(
            request_fields(),
            store=current_app.extensions["waitlist.store"],
            mirror=current_app.extensions["waitlist.mirror"],
        )
    except ValidationError as e:
        return jsonify({"error": e.reason}), 400
    except StoreError as e:
        log.error("Waitlist error: %s", e)
        return jsonify({"error": "Server error. Please try again."}), 500

    return jsonify({"success": True})
