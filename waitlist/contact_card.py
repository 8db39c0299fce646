# waitlist/contact_card.py
# Load the contact card (who the visitor receives) from contact_card.yml.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

log = logging.getLogger(__name__)

# Type alias for readability
ContactCard = Dict[str, str]

DATA_DIR = Path(__file__).resolve().parent / "data"
CONTACT_CARD_YAML_PATH = DATA_DIR / "contact_card.yml"

CARD_FIELDS = (
    "name", "title", "phone", "email", "intro", "tagline", "subject", "sender_name",
)


def _build_default_card() -> ContactCard:
    """Card used when contact_card.yml is missing or incomplete."""
    return {
        "name": "Ross Arroyo",
        "title": "Founder / CEO, Illumibot.ai",
        "phone": "601-434-4099",
        "email": "ross@illumibot.ai",
        "intro": "Thanks for connecting with me! Here is my contact info:",
        "tagline": "illumibot.ai — The 1st AI Personalized Projection™ App",
        "subject": "Ross Arroyo's Contact Info - illumibot",
        "sender_name": "Ross Arroyo - illumibot",
    }


def phone_href(phone: str) -> str:
    """`601-434-4099` -> `tel:6014344099`."""
    digits = "".join(c for c in phone if c.isdigit() or c == "+")
    return f"tel:{digits}"


def load_contact_card(path: Path | None = None) -> ContactCard:
    """
    Read the card from YAML.

    - Unknown keys are ignored
    - Empty or missing keys take the default value
    - An unreadable file gives the default card
    """
    yaml_path = path or CONTACT_CARD_YAML_PATH
    card = _build_default_card()

    if not yaml_path.exists():
        log.warning("contact_card.yml not found at %s, using default card", yaml_path)
        return card

    try:
        raw: Any = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        log.error("Error while reading %s: %s", yaml_path, exc)
        return card

    section = raw.get("contact_card") if isinstance(raw, dict) else None
    if not isinstance(section, dict):
        log.warning("%s has no 'contact_card' mapping, using default card", yaml_path)
        return card

    for key in CARD_FIELDS:
        value = section.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            card[key] = value

    return card
