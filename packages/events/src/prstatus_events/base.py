"""Abstract broadcaster interface.

The notification engine only needs ``broadcast(opcode, payload)``. The CLI
depends on BaseBroadcaster so backends are swappable without touching the
engine or the commands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prstatus_events.models import EventMessage


class BaseBroadcaster(ABC):
    """Pluggable publish side for notification outcomes.

    broadcast() must never raise into the caller: a lost event is the
    broadcaster's problem, not the build notification's.
    """

    @abstractmethod
    def broadcast(self, opcode: str, payload: dict) -> None:
        """Publish one event."""

    def list_events(self, opcode_prefix: str | None = None, pr_id: int | None = None) -> list[EventMessage]:
        """Return recorded events, oldest first.

        Backends that do not record anything return an empty list.
        """
        return []

    def close(self) -> None:
        """Release any resources held by the broadcaster.

        Default is a no-op so callers can always call close() safely.
        """


def matches(message: EventMessage, opcode_prefix: str | None, pr_id: int | None) -> bool:
    if opcode_prefix is not None and not message.opcode.startswith(opcode_prefix):
        return False
    if pr_id is not None and message.pr_id != pr_id:
        return False
    return True
