# waitlist/notifier.py
"""
Transactional email through Resend.

One message only: the contact card, sent to whoever asked for it on the
/contact page. Failures are raised as NotifyError; nothing is retried or
queued.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import resend
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .contact_card import ContactCard, load_contact_card, phone_href
from .errors import NotifyError

log = logging.getLogger(__name__)

EMAIL_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "email"

_env = Environment(
    loader=FileSystemLoader(str(EMAIL_TEMPLATE_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html",)),
    keep_trailing_newline=True,
)


def format_sender(mail_from: str, display_name: str) -> str:
    """Add the display name unless MAIL_FROM already carries one."""
    if "<" in mail_from:
        return mail_from
    return f'"{display_name}" <{mail_from}>'


class ResendNotifier:
    def __init__(self, api_key: str, mail_from: str, card: Optional[ContactCard] = None):
        resend.api_key = api_key
        self.card = card or load_contact_card()
        self.sender = format_sender(mail_from, self.card["sender_name"])

    def build_message(self, to_email: str) -> Dict[str, Any]:
        """Resend payload with plain-text and HTML bodies."""
        context = {"card": self.card, "tel_href": phone_href(self.card["phone"])}
        return {
            "from": self.sender,
            "to": [to_email],
            "subject": self.card["subject"],
            "text": _env.get_template("contact_card.txt").render(**context),
            "html": _env.get_template("contact_card.html").render(**context),
        }

    def send_contact_card(self, to_email: str) -> None:
        params = self.build_message(to_email)
        try:
            response = resend.Emails.send(params)
        except Exception as exc:  # noqa: BLE001 - auth, network or rejected recipient
            log.error("Email error while sending contact card to %s: %s", to_email, exc)
            raise NotifyError(str(exc)) from exc

        message_id = response.get("id") if isinstance(response, dict) else None
        log.info("Contact card sent to %s (id=%s)", to_email, message_id)
