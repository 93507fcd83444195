"""Adapter between reconciliation outcomes and the event broadcaster.

The broadcaster is passed in by the caller. Delivery is the broadcaster's
concern: emit() has no failure path.
"""

from __future__ import annotations

import logging
from typing import Protocol

from prstatus_core.models import BuildDetails, BuildStatusRecord, Comment, OutcomeKind, PullRequest, to_payload

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    def broadcast(self, opcode: str, payload: dict) -> None: ...


class EventEmitter:
    """Publishes ``Comment::<Kind>`` and ``Build::<Kind>`` events."""

    def __init__(self, broadcaster: Broadcaster):
        self._broadcaster = broadcaster

    def emit(
        self,
        kind: OutcomeKind,
        pr: PullRequest,
        build: BuildDetails,
        comment: Comment | None = None,
    ) -> None:
        payload = {"pr": to_payload(pr), "build": to_payload(build)}
        if comment is not None:
            payload["comment"] = to_payload(comment)
        self._publish(f"Comment::{OutcomeKind(kind).value}", payload)

    def emit_status(
        self,
        kind: OutcomeKind,
        pr: PullRequest,
        build: BuildDetails,
        record: BuildStatusRecord | None = None,
    ) -> None:
        payload = {"pr": to_payload(pr), "build": to_payload(build)}
        if record is not None:
            payload["status"] = record.to_dict()
        self._publish(f"Build::{OutcomeKind(kind).value}", payload)

    def _publish(self, opcode: str, payload: dict) -> None:
        logger.debug("Broadcasting %s for PR #%s", opcode, payload["pr"]["id"])
        self._broadcaster.broadcast(opcode, payload)
