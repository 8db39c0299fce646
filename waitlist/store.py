# =============================================================================
# File: waitlist/store.py
# Purpose: Append-only waitlist log kept as one JSON array on local disk.
# Notes:
# - The whole file is rewritten on every append (human readable, indent=2)
# - Writes go to a temp file in the same directory, then os.replace()
# - Read-modify-write is serialised by a per-store lock
# =============================================================================
from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List

from .errors import FailureKind, StoreError
from .models import WaitlistEntry

log = logging.getLogger(__name__)


class WaitlistStore:
    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def ensure(self) -> None:
        """Create the data directory and an empty `[]` file if missing."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write([])
                log.info("Initialised empty waitlist store at %s", self.path)
        except OSError as exc:
            raise StoreError(FailureKind.WRITE_FAILED, str(exc)) from exc

    def entries(self) -> List[Dict[str, Any]]:
        """Decode and return the whole log."""
        with self._lock:
            return self._read()

    def append(self, entry: WaitlistEntry) -> None:
        """Add one entry to the end of the log."""
        with self._lock:
            entries = self._read()
            entries.append(entry.to_dict())
            self._write(entries)
        log.info("Stored waitlist entry (%d total)", len(entries))

    # ------------------------------------------------------------------
    # File helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            log.error("Cannot read waitlist store %s: %s", self.path, exc)
            raise StoreError(FailureKind.CORRUPT_STORE, str(exc)) from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            log.error("Waitlist store %s is not valid JSON: %s", self.path, exc)
            raise StoreError(FailureKind.CORRUPT_STORE, str(exc)) from exc

        if not isinstance(data, list):
            log.error("Waitlist store %s does not hold a JSON array", self.path)
            raise StoreError(FailureKind.CORRUPT_STORE, "top-level value is not a list")
        return data

    def _write(self, entries: List[Dict[str, Any]]) -> None:
        text = json.dumps(entries, indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            log.error("Cannot write waitlist store %s: %s", self.path, exc)
            if tmp_name:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StoreError(FailureKind.WRITE_FAILED, str(exc)) from exc
