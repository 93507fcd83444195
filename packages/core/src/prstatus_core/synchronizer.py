"""Keep one status comment per commit in sync with the latest build state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prstatus_core.build_state import text_for
from prstatus_core.errors import ReconciliationError, RemoteListError, RemoteWriteError
from prstatus_core.matcher import match_comment
from prstatus_core.models import BuildDetails, BuildLabel, OutcomeKind, PullRequest, ReconciliationOutcome

if TYPE_CHECKING:
    from prstatus_core.events import EventEmitter
    from prstatus_core.providers.base import CommentStore

logger = logging.getLogger(__name__)


class CommentSynchronizer:
    """Runs fetch → decide → write for a single lifecycle call.

    Holds no state between calls: the candidate comments are fetched fresh
    every time. Exactly one event is emitted per reconcile(), success or not.
    """

    def __init__(self, comments: CommentStore, emitter: EventEmitter):
        self._comments = comments
        self._emitter = emitter

    def reconcile(self, pr: PullRequest, build: BuildDetails, label: BuildLabel) -> ReconciliationOutcome:
        """Create, edit or reuse the status comment for ``pr.from_commit``.

        Raises ReconciliationError when listing or writing fails; nothing is
        written after a list failure.
        """
        desired = text_for(label, build.web_url, pr.from_commit, build.status_text)

        try:
            candidates = self._comments.list_own_comments(pr.id)
        except RemoteListError as e:
            raise self._fail(pr, build, f"Error getting list of comments {e}", "RemoteListError") from e

        match = match_comment(candidates, desired, pr.from_commit)

        try:
            if match.kind == OutcomeKind.EXISTING:
                comment = match.comment
            elif match.kind == OutcomeKind.UPDATE:
                logger.debug("Editing comment %s (version %s) on PR #%s", match.comment.id, match.comment.version, pr.id)
                comment = self._comments.edit_comment(pr.id, match.comment.id, match.comment.version, desired)
            else:
                logger.debug("Posting new status comment on PR #%s", pr.id)
                comment = self._comments.create_comment(pr.id, desired)
        except RemoteWriteError as e:
            raise self._fail(pr, build, f"Error writing comment {e}", "RemoteWriteError") from e

        logger.info("PR #%s commit %s: comment %s (%s)", pr.id, pr.from_commit[:12], match.kind.value, label.value)
        self._emitter.emit(match.kind, pr, build, comment)
        return ReconciliationOutcome(kind=match.kind, pr=pr, build=build, comment=comment)

    def _fail(self, pr: PullRequest, build: BuildDetails, message: str, kind: str) -> ReconciliationError:
        logger.warning("PR #%s: %s", pr.id, message)
        outcome = ReconciliationOutcome(kind=OutcomeKind.ERROR, pr=pr, build=build)
        self._emitter.emit(OutcomeKind.ERROR, pr, build)
        return ReconciliationError(message, outcome=outcome, kind=kind)
