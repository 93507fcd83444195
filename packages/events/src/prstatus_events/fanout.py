"""In-process publish/subscribe.

Subscribers are plain callables taking an EventMessage. A subscriber that
raises is logged and skipped; the remaining subscribers still receive the
event. The most recent messages are kept in memory so list_events() works
for short-lived processes and tests.

Not selectable from .prstatus.yml: each CLI invocation is its own process,
so subscribers only exist for callers that embed BuildNotifier and pass a
FanoutBroadcaster to build_notifier() themselves.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable

from prstatus_events.base import BaseBroadcaster, matches
from prstatus_events.models import EventMessage

logger = logging.getLogger(__name__)

Subscriber = Callable[[EventMessage], None]


class FanoutBroadcaster(BaseBroadcaster):
    def __init__(self, history_size: int = 100):
        self._subscribers: list[Subscriber] = []
        self._history: deque[EventMessage] = deque(maxlen=history_size)
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register ``subscriber``; the returned callable unsubscribes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    def broadcast(self, opcode: str, payload: dict) -> None:
        message = EventMessage(opcode=opcode, payload=payload)
        with self._lock:
            self._history.append(message)
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(message)
            except Exception as e:
                logger.warning("Subscriber %r failed on %s: %s", subscriber, opcode, e)

    def list_events(self, opcode_prefix: str | None = None, pr_id: int | None = None) -> list[EventMessage]:
        with self._lock:
            history = list(self._history)
        return [m for m in history if matches(m, opcode_prefix, pr_id)]
