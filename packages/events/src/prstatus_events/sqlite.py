"""SQLiteBroadcaster: local event log for auditing past notifications.

Every broadcast becomes one row, so `prstatus events` can show what the
notifier decided (Existing / Update / Post / Error) for each build without
scraping the review platform.

Schema:
  events: one row per broadcast; the payload is kept as JSON, with the PR id
           and opcode pulled out into indexed columns for filtering.
"""

from __future__ import annotations

import json
import logging
import sqlite3

from prstatus_events.base import BaseBroadcaster
from prstatus_events.models import EventMessage

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    opcode        TEXT NOT NULL,
    pr_id         INTEGER,
    emitted_at    TEXT,
    payload_json  TEXT DEFAULT '{}'
);
CREATE INDEX IF NOT EXISTS idx_events_pr     ON events (pr_id);
CREATE INDEX IF NOT EXISTS idx_events_opcode ON events (opcode);
"""


class SQLiteBroadcaster(BaseBroadcaster):
    """Records events in a local SQLite database file.

    The path defaults to `.prstatus.db` in the current working directory.
    Configure via .prstatus.yml: `events: sqlite` and `events_path: ...`.
    """

    def __init__(self, db_path: str = ".prstatus.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def broadcast(self, opcode: str, payload: dict) -> None:
        message = EventMessage(opcode=opcode, payload=payload)
        try:
            self._conn.execute(
                "INSERT INTO events (opcode, pr_id, emitted_at, payload_json) VALUES (?, ?, ?, ?)",
                (message.opcode, message.pr_id, message.emitted_at, json.dumps(payload, default=str)),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            # broadcast() never raises into the notifier.
            logger.warning("SQLiteBroadcaster could not record %s: %s", opcode, e)

    def list_events(self, opcode_prefix: str | None = None, pr_id: int | None = None) -> list[EventMessage]:
        query = "SELECT * FROM events"
        clauses, params = [], []
        if opcode_prefix is not None:
            clauses.append("substr(opcode, 1, ?) = ?")
            params.extend([len(opcode_prefix), opcode_prefix])
        if pr_id is not None:
            clauses.append("pr_id = ?")
            params.append(pr_id)
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id"

        rows = self._conn.execute(query, params).fetchall()
        return [self._row_to_message(r) for r in rows]

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_message(row: sqlite3.Row) -> EventMessage:
        return EventMessage(
            opcode=row["opcode"],
            payload=json.loads(row["payload_json"] or "{}"),
            emitted_at=row["emitted_at"] or "",
        )
