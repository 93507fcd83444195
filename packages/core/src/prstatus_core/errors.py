"""Error kinds raised while notifying a review platform about a build."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prstatus_core.models import ReconciliationOutcome


class PrStatusError(Exception):
    """Base class for every prstatus failure."""


class RemoteListError(PrStatusError):
    """Listing remote objects (comments, pull requests) failed."""


class RemoteWriteError(PrStatusError):
    """Creating or editing a comment, or posting a build status, failed."""


class VersionConflictError(RemoteWriteError):
    """The comment version used for an edit is stale."""


class ReconciliationError(PrStatusError):
    """A comment reconciliation could not complete.

    ``outcome`` is the Error-tagged outcome that was broadcast; ``kind`` names
    the remote failure that caused it.
    """

    def __init__(self, message: str, outcome: ReconciliationOutcome | None = None, kind: str = ""):
        super().__init__(message)
        self.outcome = outcome
        self.kind = kind


class NotificationError(PrStatusError):
    """A lifecycle call failed before its comment was written."""


class StatusPostError(PrStatusError):
    """The build-status post failed after the comment was reconciled.

    The comment outcome is still valid and is carried in ``outcome``.
    """

    def __init__(self, message: str, outcome: ReconciliationOutcome | None = None):
        super().__init__(message)
        self.outcome = outcome
