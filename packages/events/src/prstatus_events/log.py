"""Broadcaster that writes every event to the ``prstatus.events`` logger."""

from __future__ import annotations

import json
import logging

from prstatus_events.base import BaseBroadcaster

logger = logging.getLogger("prstatus.events")


class LogBroadcaster(BaseBroadcaster):
    def __init__(self, level: int = logging.INFO):
        self._level = level

    def broadcast(self, opcode: str, payload: dict) -> None:
        logger.log(self._level, "%s %s", opcode, json.dumps(payload, default=str, ensure_ascii=False))
