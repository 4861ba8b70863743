from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.model import TimeLog
from ..common.datetime_utils import now_local
from ..core.constants import LOGS_KEY, NOTIFY_RECENCY_SECONDS
from ..storage.port import KeyValueStorage, StorageEvent
from .detection import detect_changed_log

logger = logging.getLogger(__name__)

LogListener = Callable[[TimeLog], None]


class NotificationBus:
    """Fan-out of "log changed" events.

    Saves made in this session are published synchronously. Saves made in
    other sessions arrive through the storage change signal once ``attach``
    has been called, filtered by the recency threshold.
    """

    def __init__(
        self,
        *,
        recency_seconds: float = NOTIFY_RECENCY_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._listeners: list[LogListener] = []
        self._recency_seconds = float(recency_seconds)
        self._clock = clock
        self._detach: Optional[Callable[[], None]] = None

    def subscribe(self, listener: LogListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, log: TimeLog) -> None:
        for listener in list(self._listeners):
            try:
                listener(log)
            except Exception:
                logger.exception("Log listener failed for %s", log.id)

    def attach(self, storage: KeyValueStorage) -> None:
        self.detach()
        self._detach = storage.subscribe(self.on_storage_event)

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def on_storage_event(self, event: StorageEvent) -> Optional[TimeLog]:
        if event.key != LOGS_KEY:
            return None

        log = detect_changed_log(
            event.old_value,
            event.new_value,
            self._clock(),
            threshold_seconds=self._recency_seconds,
        )
        if log is not None:
            logger.info("Log %s changed in another session (%s)", log.id, log.status.value)
            self.publish(log)
        return log
