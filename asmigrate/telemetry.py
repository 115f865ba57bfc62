"""Best-effort telemetry for migration settings runs.

Events are appended to a local SQLite ledger and can be listed with
`asmigrate history`. Emission never raises: a broken ledger must not change
the outcome of a run.
"""

import json
import logging
import sqlite3
import time
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RUN_STARTED = "run_started"
TIER_FALLBACK = "tier_fallback"
RUN_SUCCEEDED = "run_succeeded"
RUN_FAILED = "run_failed"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS telemetry_events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp REAL NOT NULL,
    date TEXT NOT NULL,
    run_id TEXT NOT NULL DEFAULT '',
    event TEXT NOT NULL,
    properties_json TEXT NOT NULL DEFAULT '{}'
);

CREATE INDEX IF NOT EXISTS idx_telemetry_events_date ON telemetry_events(date);
CREATE INDEX IF NOT EXISTS idx_telemetry_events_run ON telemetry_events(run_id);
"""


class TelemetryEvent(BaseModel):
    """A single recorded telemetry event."""

    timestamp: float
    date: str
    run_id: str
    event: str
    properties: dict[str, Any]


class TelemetrySink(ABC):
    """Receives pipeline checkpoint events."""

    @abstractmethod
    def emit(self, event: str, properties: dict[str, Any] | None = None) -> None:
        """Record an event. May raise; callers go through safe_emit."""


class NullTelemetrySink(TelemetrySink):
    """Discards every event."""

    def emit(self, event: str, properties: dict[str, Any] | None = None) -> None:
        return None


class LedgerTelemetrySink(TelemetrySink):
    """Appends events to a local SQLite ledger.

    Args:
        path: Ledger database file (parent directories are created)
        run_id: Identifier stamped on every event from this sink
    """

    def __init__(self, path: Path, run_id: str = "") -> None:
        self.path = Path(path)
        self.run_id = run_id

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.executescript(_SCHEMA)
        return conn

    def emit(self, event: str, properties: dict[str, Any] | None = None) -> None:
        conn = self._connect()
        try:
            now = time.time()
            conn.execute(
                """
                INSERT INTO telemetry_events
                    (timestamp, date, run_id, event, properties_json)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    now,
                    datetime.fromtimestamp(now).strftime("%Y-%m-%d"),
                    self.run_id,
                    event,
                    json.dumps(properties or {}, default=str),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def query_events(
        self,
        days: int | None = 7,
        event: str | None = None,
        limit: int = 100,
    ) -> list[TelemetryEvent]:
        """Query recorded events, newest first.

        Args:
            days: Number of days to look back (None = all time)
            event: Filter by event name (None = all events)
            limit: Max events to return
        """
        if not self.path.exists():
            return []

        clauses = []
        params: list[Any] = []
        if days is not None:
            clauses.append("timestamp >= ?")
            params.append(time.time() - days * 86400)
        if event:
            clauses.append("event = ?")
            params.append(event)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT * FROM telemetry_events {where} "
                "ORDER BY timestamp DESC, id DESC LIMIT ?",
                (*params, limit),
            ).fetchall()
        finally:
            conn.close()

        return [
            TelemetryEvent(
                timestamp=row["timestamp"],
                date=row["date"],
                run_id=row["run_id"],
                event=row["event"],
                properties=json.loads(row["properties_json"] or "{}"),
            )
            for row in rows
        ]


def safe_emit(
    sink: TelemetrySink | None,
    event: str,
    properties: dict[str, Any] | None = None,
) -> None:
    """Emit an event, swallowing every failure."""
    if sink is None:
        return
    try:
        sink.emit(event, properties)
    except Exception as e:
        logger.debug("Telemetry event %s dropped: %s", event, e)
