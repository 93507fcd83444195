"""No-op broadcaster: the default when no event backend is configured.

Using a NoOpBroadcaster rather than None lets the notifier always call
broadcast() without conditional checks.
"""

from __future__ import annotations

from prstatus_events.base import BaseBroadcaster


class NoOpBroadcaster(BaseBroadcaster):
    def broadcast(self, opcode: str, payload: dict) -> None:
        pass  # intentional no-op
