# waitlist/intake.py
# Intake pipeline: validation -> durable log -> mirror (waitlist)
#                  validation -> email -> mirror (contact).

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Mapping, Optional

from .errors import ValidationError
from .models import ContactRequest, WaitlistEntry, iso_timestamp, utc_now
from .validation import clean_fields, clean_value, validate, validate_contact

log = logging.getLogger(__name__)


def build_entry(fields: Mapping[str, Any], now: dt.datetime) -> WaitlistEntry:
    """Build a WaitlistEntry from already validated fields."""
    cleaned = clean_fields(fields)
    return WaitlistEntry(
        company=cleaned["company"],
        first_name=cleaned["firstName"],
        last_name=cleaned["lastName"],
        email=cleaned["email"],
        phone=cleaned["phone"],
        notes=cleaned["notes"],
        timestamp=iso_timestamp(now),
    )


def submit_waitlist(
    fields: Mapping[str, Any],
    *,
    store,
    mirror,
    now: Optional[dt.datetime] = None,
) -> WaitlistEntry:
    """
    Handle one waitlist submission.

    Raises ValidationError before any side effect, StoreError when the local
    log cannot be written. The mirror call never raises and is not awaited.
    Duplicates are accepted: every call appends a new record.
    """
    result = validate(fields)
    if not result.valid:
        raise ValidationError(result.reason)

    entry = build_entry(fields, now or utc_now())
    store.append(entry)
    try:
        mirror.mirror_waitlist(entry)
    except Exception:  # noqa: BLE001
        log.exception("Firestore write error")
    return entry


def share_contact(
    fields: Mapping[str, Any],
    *,
    notifier,
    mirror,
    now: Optional[dt.datetime] = None,
) -> ContactRequest:
    """
    Email the contact card to the submitted address.

    Raises ValidationError before sending, NotifyError when the relay fails.
    The mirror write happens after a successful send and is best effort.
    """
    result = validate_contact(fields)
    if not result.valid:
        raise ValidationError(result.reason)

    request = ContactRequest(
        email=clean_value(fields.get("email")),
        requested_at=iso_timestamp(now or utc_now()),
    )
    notifier.send_contact_card(request.email)
    try:
        mirror.mirror_contact(request.email, request.requested_at)
    except Exception:  # noqa: BLE001
        log.exception("Firestore contact log error")
    return request
