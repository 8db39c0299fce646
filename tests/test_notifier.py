# tests/test_notifier.py
import pytest
import resend

from waitlist.contact_card import load_contact_card
from waitlist.errors import NotifyError
from waitlist.notifier import ResendNotifier, format_sender


@pytest.fixture
def sent(monkeypatch):
    """Capture Resend payloads instead of calling the API."""
    calls = []

    def fake_send(params):
        calls.append(params)
        return {"id": "email_123"}

    monkeypatch.setattr(resend.Emails, "send", fake_send)
    return calls


def test_contact_card_message(sent):
    notifier = ResendNotifier("re_test", "ross@illumibot.ai")
    notifier.send_contact_card("visitor@example.com")

    assert len(sent) == 1
    msg = sent[0]
    assert msg["from"] == '"Ross Arroyo - illumibot" <ross@illumibot.ai>'
    assert msg["to"] == ["visitor@example.com"]
    assert msg["subject"] == "Ross Arroyo's Contact Info - illumibot"
    assert "Ross Arroyo\nFounder / CEO, Illumibot.ai\n601-434-4099\nross@illumibot.ai" in msg["text"]
    assert 'href="tel:6014344099"' in msg["html"]
    assert 'href="mailto:ross@illumibot.ai"' in msg["html"]


def test_api_key_is_set_on_client(sent):
    ResendNotifier("re_secret", "ross@illumibot.ai")
    assert resend.api_key == "re_secret"


def test_html_body_is_escaped(sent):
    card = load_contact_card()
    card["name"] = "Ross <script>"
    ResendNotifier("re_test", "ross@illumibot.ai", card=card).send_contact_card("v@example.com")
    assert "<script>" not in sent[0]["html"]
    assert "Ross &lt;script&gt;" in sent[0]["html"]
    # plain-text body is not HTML-escaped
    assert "Ross <script>" in sent[0]["text"]


def test_relay_failure_raises_notify_error(monkeypatch):
    def refuse(params):
        raise RuntimeError("403 validation_error: The email address is not valid.")

    monkeypatch.setattr(resend.Emails, "send", refuse)
    notifier = ResendNotifier("re_test", "ross@illumibot.ai")
    with pytest.raises(NotifyError):
        notifier.send_contact_card("visitor@example.com")


def test_connection_failure_raises_notify_error(monkeypatch):
    def offline(params):
        raise ConnectionError("connection refused")

    monkeypatch.setattr(resend.Emails, "send", offline)
    with pytest.raises(NotifyError, match="connection refused"):
        ResendNotifier("re_test", "ross@illumibot.ai").send_contact_card("v@example.com")


def test_format_sender_keeps_existing_display_name():
    assert format_sender("Team <team@illumibot.ai>", "Ross") == "Team <team@illumibot.ai>"
    assert format_sender("team@illumibot.ai", "Ross") == '"Ross" <team@illumibot.ai>'
