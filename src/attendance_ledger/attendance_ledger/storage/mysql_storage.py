from __future__ import annotations

import logging
from typing import Callable, Optional

from ..database.bootstrap import KV_TABLE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .port import KeyValueStorage, StorageEvent, StorageListener

logger = logging.getLogger(__name__)


class MySQLKeyValueStorage(KeyValueStorage):
    """Durable storage session backed by one MySQL table.

    MySQL has no change feed, so writes from other processes are discovered
    by ``poll_changes``. It compares the table with the snapshot this session
    last announced and dispatches one ``StorageEvent`` per changed key.
    Plain reads never advance that snapshot; only this session's own writes
    and ``poll_changes`` do.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._listeners: list[StorageListener] = []
        self._announced: Optional[dict[str, str]] = None

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT v FROM {KV_TABLE} WHERE k=%s", (key,))
            row = fetchone(cur)
        return row["v"] if row else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {KV_TABLE}(k, v) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, value),
            )
        if self._announced is not None:
            self._announced[key] = value

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {KV_TABLE} WHERE k=%s", (key,))
        if self._announced is not None:
            self._announced.pop(key, None)

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _snapshot(self) -> dict[str, str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT k, v FROM {KV_TABLE}")
            rows = fetchall(cur)
        return {r["k"]: r["v"] for r in rows}

    def poll_changes(self) -> list[StorageEvent]:
        """Detect values written by other sessions since the last poll.

        The first call only records the baseline.
        """
        current = self._snapshot()
        previous, self._announced = self._announced, dict(current)
        if previous is None:
            return []

        events = [
            StorageEvent(key=key, old_value=previous.get(key), new_value=current.get(key))
            for key in sorted(set(current) | set(previous))
            if previous.get(key) != current.get(key)
        ]

        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception("Storage listener failed for key %s", event.key)
        return events
