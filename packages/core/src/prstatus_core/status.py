"""Native build-status posting (enabled by ``post_build``)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prstatus_core.build_state import make_status_record
from prstatus_core.errors import RemoteWriteError
from prstatus_core.models import BuildDetails, BuildStatusRecord, OutcomeKind, PullRequest

if TYPE_CHECKING:
    from prstatus_core.events import EventEmitter
    from prstatus_core.providers.base import BuildStatusClient

logger = logging.getLogger(__name__)


class StatusPoster:
    def __init__(self, client: BuildStatusClient, emitter: EventEmitter | None = None):
        self._client = client
        self._emitter = emitter

    def post_status(self, build: BuildDetails, pr: PullRequest) -> BuildStatusRecord:
        """Post the build-status record for ``pr.from_commit``; raise RemoteWriteError on failure."""
        record = make_status_record(build)
        try:
            self._client.post_build_status(pr.from_commit, record)
        except RemoteWriteError:
            if self._emitter is not None:
                self._emitter.emit_status(OutcomeKind.ERROR, pr, build)
            raise

        logger.info("Posted %s build status %s for commit %s", record.state.value, record.key, pr.from_commit[:12])
        if self._emitter is not None:
            self._emitter.emit_status(OutcomeKind.POST, pr, build, record)
        return record
