# =============================================================================
# File: waitlist/config.py
# Purpose: Read runtime settings from the environment (.env supported).
# =============================================================================
from __future__ import annotations

import os
from typing import Any, Dict, Mapping

from dotenv import load_dotenv

from .errors import ConfigError

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://illumibot-waitlist--illumibot-waitlist.us-east4.hosted.app"

# Credentials that have no usable default and must be provided.
REQUIRED_MAIL_SETTINGS = ("RESEND_API_KEY", "MAIL_FROM")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_settings(overrides: Mapping[str, Any] | None = None) -> Dict[str, Any]:
    """Build the settings dict from env vars, then apply `overrides` on top."""
    settings: Dict[str, Any] = {
        "PORT": os.getenv("PORT", "3000"),
        "BASE_URL": os.getenv("BASE_URL", DEFAULT_BASE_URL),
        "DATA_FILE": os.getenv("DATA_FILE", os.path.join("data", "waitlist.json")),
        "RESEND_API_KEY": os.getenv("RESEND_API_KEY", ""),
        "MAIL_FROM": os.getenv("MAIL_FROM", ""),
        "FIRESTORE_ENABLED": os.getenv("FIRESTORE_ENABLED", "true"),
        "MIRROR_MAX_ATTEMPTS": os.getenv("MIRROR_MAX_ATTEMPTS", "3"),
        "MIRROR_RETRY_DELAY": os.getenv("MIRROR_RETRY_DELAY", "1.0"),
        "WAITLIST_RATE_LIMIT": os.getenv("WAITLIST_RATE_LIMIT", "20 per 15 minutes"),
        "CONTACT_RATE_LIMIT": os.getenv("CONTACT_RATE_LIMIT", "10 per 15 minutes"),
        "RATELIMIT_STORAGE_URI": os.getenv("RATELIMIT_STORAGE_URI", "memory://"),
        "RATELIMIT_ENABLED": os.getenv("RATELIMIT_ENABLED", "true"),
        "TRUST_PROXY": os.getenv("TRUST_PROXY", "false"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
    }
    if overrides:
        settings.update(overrides)

    try:
        settings["PORT"] = int(settings["PORT"])
        settings["MIRROR_MAX_ATTEMPTS"] = max(int(settings["MIRROR_MAX_ATTEMPTS"]), 1)
        settings["MIRROR_RETRY_DELAY"] = max(float(settings["MIRROR_RETRY_DELAY"]), 0.0)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc

    for key in ("FIRESTORE_ENABLED", "RATELIMIT_ENABLED", "TRUST_PROXY"):
        settings[key] = _as_bool(settings[key])

    settings["BASE_URL"] = str(settings["BASE_URL"]).rstrip("/")
    return settings


def require_mail_settings(settings: Mapping[str, Any]) -> None:
    """Fail at start-up when mail credentials are missing."""
    missing = [key for key in REQUIRED_MAIL_SETTINGS if not settings.get(key)]
    if missing:
        raise ConfigError(
            "Missing required mail settings: " + ", ".join(missing)
            + ". Set them in the environment or in .env."
        )
