# =============================================================================
# File: waitlist/errors.py
# Purpose: Error taxonomy shared by the intake pipeline and the HTTP layer.
# =============================================================================
from __future__ import annotations

import enum


class ConfigError(RuntimeError):
    """Invalid or missing configuration, raised at start-up."""


class IntakeError(Exception):
    """Base class for errors raised while handling a submission."""


class ValidationError(IntakeError):
    """Submission rejected by the validator (client error)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FailureKind(str, enum.Enum):
    CORRUPT_STORE = "corrupt_store"
    WRITE_FAILED = "write_failed"


class StoreError(IntakeError):
    """The durable log could not be read or written."""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind


class NotifyError(IntakeError):
    """The mail relay refused or failed to send the message."""


class MirrorError(IntakeError):
    """A write to the external mirror failed. Never leaves the mirror."""
