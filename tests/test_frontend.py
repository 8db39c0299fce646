# tests/test_frontend.py
import base64

from waitlist.qr import qr_data_url
from waitlist.validation import EMAIL_PATTERN


def test_waitlist_page(client):
    rv = client.get("/")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert "Installer Resellers Program" in html
    assert 'data-endpoint="/api/waitlist"' in html
    assert f'data-email-pattern="{EMAIL_PATTERN}"' in html
    for name in ("company", "firstName", "lastName", "email", "phone", "notes"):
        assert f'name="{name}"' in html


def test_contact_page(client):
    rv = client.get("/contact")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert 'data-endpoint="/api/contact"' in html
    assert "Send Me Ross's Info" in html


def test_qr_page_points_at_base_url(client):
    rv = client.get("/qr")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert html.count("data:image/png;base64,") == 2
    assert "https://waitlist.example.test/contact" in html


def test_qr_data_url_is_png():
    url = qr_data_url("https://waitlist.example.test/")
    prefix = "data:image/png;base64,"
    assert url.startswith(prefix)
    assert base64.b64decode(url[len(prefix):]).startswith(b"\x89PNG\r\n\x1a\n")


def test_qr_failure(client, monkeypatch):
    def boom(url):
        raise RuntimeError("encoder exploded")

    monkeypatch.setattr("waitlist.frontend.qr_data_url", boom)
    rv = client.get("/qr")
    assert rv.status_code == 500
    assert rv.get_data(as_text=True) == "Error generating QR codes"


def test_static_assets_served(client):
    assert client.get("/static/css/site.css").status_code == 200
    assert client.get("/static/js/forms.js").status_code == 200
