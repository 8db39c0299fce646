# =============================================================================
# File: waitlist/validation.py
# Purpose: Server-side checks for waitlist and contact submissions.
# =============================================================================
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Pragmatic syntax check, not RFC 5322. Also rendered into the HTML forms.
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
EMAIL_RE = re.compile(EMAIL_PATTERN)

REQUIRED_FIELDS = ("company", "firstName", "lastName", "email", "phone")
OPTIONAL_FIELDS = ("notes",)

MSG_REQUIRED = "All required fields must be filled."
MSG_INVALID_EMAIL = "Invalid email address."
MSG_CONTACT_EMAIL = "Please provide a valid email address."


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None


def clean_value(value: Any) -> str:
    """
    Normalise one submitted value to a stripped string.

    None and non-scalar values (lists, dicts) count as absent and give "".
    Numbers are kept in their string form.
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return ""


def clean_fields(fields: Mapping[str, Any]) -> Dict[str, str]:
    """Return every known field, cleaned; missing ones become ""."""
    return {name: clean_value(fields.get(name)) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS}


def is_valid_email(email: Any) -> bool:
    email = clean_value(email)
    return bool(email) and EMAIL_RE.match(email) is not None


def validate(fields: Mapping[str, Any]) -> ValidationResult:
    """Check a waitlist submission: required fields first, then the email."""
    cleaned = clean_fields(fields)
    if any(not cleaned[name] for name in REQUIRED_FIELDS):
        return ValidationResult(False, MSG_REQUIRED)
    if not is_valid_email(cleaned["email"]):
        return ValidationResult(False, MSG_INVALID_EMAIL)
    return ValidationResult(True)


def validate_contact(fields: Mapping[str, Any]) -> ValidationResult:
    """Check a contact-share submission (email only)."""
    if not is_valid_email(fields.get("email")):
        return ValidationResult(False, MSG_CONTACT_EMAIL)
    return ValidationResult(True)
