# =============================================================================
# File: waitlist/models.py
# Purpose: Plain records handled by the intake pipeline.
# Notes:
# - Immutable once built (frozen dataclasses)
# - Serialised with the camelCase keys used by the forms and the JSON file
# - Timestamps are ISO-8601 UTC strings, millisecond precision, "Z" suffix
# =============================================================================
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def iso_timestamp(moment: dt.datetime) -> str:
    """Format `moment` like `2026-10-19T12:00:00.000Z`."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    moment = moment.astimezone(dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class WaitlistEntry:
    company: str
    first_name: str
    last_name: str
    email: str
    phone: str
    timestamp: str
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ContactRequest:
    """A request to receive the contact card. Only its occurrence is mirrored."""

    email: str
    requested_at: str = field(default_factory=lambda: iso_timestamp(utc_now()))
