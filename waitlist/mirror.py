# =============================================================================
# File: waitlist/mirror.py
# Purpose: Best-effort copy of submissions to Firestore (audit/analytics).
# Notes:
# - The local JSON log is authoritative; the mirror may lag or diverge
# - Waitlist entries go through an in-process outbox drained by one thread
# - Nothing here ever raises into a request handler
# =============================================================================
from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Mapping, Optional

import firebase_admin
from firebase_admin import firestore

from .errors import MirrorError
from .models import WaitlistEntry

log = logging.getLogger(__name__)

WAITLIST_COLLECTION = "waitlist"
CONTACT_COLLECTION = "contact_submissions"

_STOP = object()


class DisabledMirror:
    """Stand-in used when Firestore is unconfigured or unreachable."""

    enabled = False

    def __init__(self, reason: str = "disabled"):
        self.reason = reason

    def mirror_waitlist(self, entry: WaitlistEntry) -> None:
        return None

    def mirror_contact(self, email: str, timestamp: str) -> None:
        return None

    def drain(self, timeout: Optional[float] = None) -> bool:
        return True

    def close(self) -> None:
        return None


class FirestoreMirror:
    """
    Mirror writes to a Firestore client.

    `client` only needs `collection(name).add(data)`, which keeps the class
    usable with a fake in tests.
    """

    enabled = True

    def __init__(
        self,
        client: Any,
        *,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        server_timestamp: Any = None,
    ):
        self.client = client
        self.max_attempts = max(int(max_attempts), 1)
        self.retry_delay = max(float(retry_delay), 0.0)
        self.server_timestamp = (
            firestore.SERVER_TIMESTAMP if server_timestamp is None else server_timestamp
        )
        self._outbox: "queue.Queue[Any]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._worker_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Waitlist: fire-and-forget through the outbox
    # ------------------------------------------------------------------

    def mirror_waitlist(self, entry: WaitlistEntry) -> None:
        self._ensure_worker()
        self._outbox.put(entry.to_dict())

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Wait until every queued entry has been handled. False on timeout."""
        if timeout is None:
            self._outbox.join()
            return True
        deadline = time.monotonic() + timeout
        while self._outbox.unfinished_tasks:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def close(self) -> None:
        """Drain the outbox, then stop the worker thread."""
        with self._worker_lock:
            worker = self._worker
            self._worker = None
        if worker is None:
            return
        self._outbox.put(_STOP)
        worker.join()

    def _ensure_worker(self) -> None:
        with self._worker_lock:
            if self._worker is not None and self._worker.is_alive():
                return
            self._worker = threading.Thread(
                target=self._run, name="firestore-mirror", daemon=True
            )
            self._worker.start()

    def _run(self) -> None:
        while True:
            item = self._outbox.get()
            try:
                if item is _STOP:
                    return
                self._deliver(WAITLIST_COLLECTION, item)
            finally:
                self._outbox.task_done()

    def _deliver(self, collection: str, data: Mapping[str, Any]) -> bool:
        for attempt in range(1, self.max_attempts + 1):
            try:
                self._add(collection, data)
                return True
            except MirrorError as exc:
                if attempt < self.max_attempts:
                    log.warning(
                        "Firestore write to '%s' failed (attempt %d/%d): %s",
                        collection, attempt, self.max_attempts, exc,
                    )
                    time.sleep(self.retry_delay)
                else:
                    log.error(
                        "Firestore write to '%s' dropped after %d attempts: %s",
                        collection, self.max_attempts, exc,
                    )
        return False

    # ------------------------------------------------------------------
    # Contact: awaited, single attempt, errors logged
    # ------------------------------------------------------------------

    def mirror_contact(self, email: str, timestamp: str) -> None:
        data = {
            "email": email,
            "requestedAt": timestamp,
            "submitted_at": self.server_timestamp,
        }
        try:
            self._add(CONTACT_COLLECTION, data)
        except MirrorError as exc:
            log.error("Firestore contact log error: %s", exc)

    def _add(self, collection: str, data: Mapping[str, Any]) -> None:
        try:
            self.client.collection(collection).add(dict(data))
        except Exception as exc:  # noqa: BLE001 - any client failure is a mirror failure
            raise MirrorError(str(exc)) from exc


def build_mirror(settings: Mapping[str, Any]):
    """
    Pick the mirror once, at start-up.

    Returns a FirestoreMirror when firebase-admin can initialise with the
    ambient credentials, otherwise a DisabledMirror.
    """
    if not settings.get("FIRESTORE_ENABLED", True):
        log.info("Firestore mirror disabled by configuration")
        return DisabledMirror("disabled by configuration")

    try:
        try:
            firebase_admin.get_app()
        except ValueError:
            firebase_admin.initialize_app()
        client = firestore.client()
    except Exception as exc:  # noqa: BLE001 - no credentials / no project / offline
        log.warning("Firestore unavailable, mirror disabled: %s", exc)
        return DisabledMirror(str(exc))

    log.info("Firestore mirror enabled")
    return FirestoreMirror(
        client,
        max_attempts=settings.get("MIRROR_MAX_ATTEMPTS", 3),
        retry_delay=settings.get("MIRROR_RETRY_DELAY", 1.0),
    )
