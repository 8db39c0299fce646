# =============================================================================
# File: tests/conftest.py
# Purpose: Shared fixtures + in-memory fakes for the mail relay and Firestore.
# =============================================================================
import pytest

from waitlist import create_app
from waitlist.errors import NotifyError
from waitlist.limits import limiter
from waitlist.store import WaitlistStore


class FakeNotifier:
    """Records recipients instead of calling Resend."""

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send_contact_card(self, to_email):
        if self.fail:
            raise NotifyError("relay refused the message")
        self.sent.append(to_email)


class RecordingMirror:
    """Synchronous mirror that keeps what it was given."""

    enabled = True

    def __init__(self):
        self.waitlist = []
        self.contacts = []

    def mirror_waitlist(self, entry):
        self.waitlist.append(entry)

    def mirror_contact(self, email, timestamp):
        self.contacts.append((email, timestamp))

    def drain(self, timeout=None):
        return True

    def close(self):
        pass


class BrokenMirror(RecordingMirror):
    """Simulates an unreachable Firestore that raises on every call."""

    def mirror_waitlist(self, entry):
        raise RuntimeError("firestore unreachable")

    def mirror_contact(self, email, timestamp):
        raise RuntimeError("firestore unreachable")


class FakeCollection:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def add(self, data):
        self.client.calls.append(self.name)
        if self.client.failures_left > 0:
            self.client.failures_left -= 1
            raise ConnectionError("deadline exceeded")
        self.client.docs.setdefault(self.name, []).append(data)
        return (None, f"doc-{len(self.client.docs[self.name])}")


class FakeFirestore:
    """Just enough of google.cloud.firestore.Client for the mirror."""

    def __init__(self, failures=0):
        self.failures_left = failures
        self.calls = []
        self.docs = {}

    def collection(self, name):
        return FakeCollection(self, name)


VALID_WAITLIST = {
    "company": "Acme",
    "firstName": "Jo",
    "lastName": "Lee",
    "email": "jo@acme.com",
    "phone": "555-1234",
}


@pytest.fixture
def store(tmp_path):
    return WaitlistStore(tmp_path / "data" / "waitlist.json")


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def mirror():
    return RecordingMirror()


@pytest.fixture
def make_app(tmp_path, store, notifier, mirror):
    """Factory so a test can swap one collaborator or one setting."""

    def _make(config=None, **collaborators):
        settings = {
            "TESTING": True,
            "DATA_FILE": str(tmp_path / "data" / "waitlist.json"),
            "FIRESTORE_ENABLED": False,
            "RATELIMIT_ENABLED": True,
            "RATELIMIT_STORAGE_URI": "memory://",
            "BASE_URL": "https://waitlist.example.test",
        }
        settings.update(config or {})
        collaborators.setdefault("store", store)
        collaborators.setdefault("notifier", notifier)
        collaborators.setdefault("mirror", mirror)
        app = create_app(settings, **collaborators)
        if app.config["RATELIMIT_ENABLED"]:
            limiter.reset()
        return app

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_firestore():
    """The fake Firestore client class, so tests can build one per case."""
    return FakeFirestore


@pytest.fixture
def failing_notifier():
    return FakeNotifier(fail=True)


@pytest.fixture
def broken_mirror():
    return BrokenMirror()


@pytest.fixture
def valid_fields():
    return dict(VALID_WAITLIST)
