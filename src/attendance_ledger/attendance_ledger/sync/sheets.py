from __future__ import annotations

import logging
from queue import Queue
from threading import Thread
from typing import Any, Optional, Protocol

import httpx

from ..attendance.model import TimeLog
from ..core.constants import UNKNOWN_SYNC_EMAIL
from ..users.model import User

logger = logging.getLogger(__name__)


class ReplicationSink(Protocol):
    def sync_user(self, user: User) -> None:
        raise NotImplementedError

    def sync_log(self, log: TimeLog, email: Optional[str] = None) -> None:
        raise NotImplementedError


def user_payload(user: User) -> dict[str, Any]:
    return {"action": "ADD_USER", "data": user.to_dict()}


def log_payload(log: TimeLog, email: Optional[str] = None) -> dict[str, Any]:
    data = log.to_dict()
    data["email"] = email or UNKNOWN_SYNC_EMAIL
    return {"action": "LOG_ATTENDANCE", "data": data}


class SheetsSyncService(ReplicationSink):
    """Outbound replication to a spreadsheet web-app endpoint.

    Fire-and-forget: payloads are queued and posted by a daemon worker, one
    attempt each. Responses are not read and failures are only logged.
    """

    def __init__(
        self,
        url: Optional[str],
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._url = (url or "").strip()
        self._client = client or httpx.Client(timeout=timeout)
        self._queue: "Queue[Optional[dict[str, Any]]]" = Queue()
        self._worker: Optional[Thread] = None

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    def sync_user(self, user: User) -> None:
        self._enqueue(user_payload(user))

    def sync_log(self, log: TimeLog, email: Optional[str] = None) -> None:
        self._enqueue(log_payload(log, email))

    def _enqueue(self, payload: dict[str, Any]) -> None:
        if not self.enabled:
            return
        self._ensure_worker()
        self._queue.put(payload)

    def _ensure_worker(self) -> None:
        if self._worker is None or not self._worker.is_alive():
            self._worker = Thread(target=self._run, name="sheets-sync", daemon=True)
            self._worker.start()

    def _run(self) -> None:
        while True:
            payload = self._queue.get()
            try:
                if payload is None:
                    break
                self.push(payload)
            finally:
                self._queue.task_done()

    def push(self, payload: dict[str, Any]) -> bool:
        try:
            self._client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            logger.error("Failed to sync %s to sheets: %s", payload.get("action"), e)
            return False
        logger.info("Synced %s to sheets", payload.get("action"))
        return True

    def flush(self) -> None:
        """Block until every queued payload has been attempted."""
        self._queue.join()

    def close(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            self._queue.put(None)
            self._worker.join()
        self._worker = None
        self._client.close()
