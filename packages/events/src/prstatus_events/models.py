"""Event records published by prstatus.

Decoupled from prstatus_core so broadcasters can be used (and queried)
without importing the notification engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class EventMessage:
    """One broadcast event.

    ``opcode`` is e.g. "Comment::Update" or "Build::Post"; ``payload`` holds
    plain dicts for "pr", "build" and, when present, "comment" / "status".
    """

    opcode: str
    payload: dict
    emitted_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())  # ISO-8601 UTC

    @property
    def pr_id(self) -> int | None:
        return self.payload.get("pr", {}).get("id")
