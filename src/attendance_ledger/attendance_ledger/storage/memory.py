from __future__ import annotations

import logging
from typing import Callable, Optional

from .port import KeyValueStorage, StorageEvent, StorageListener

logger = logging.getLogger(__name__)


class SharedMemoryMedium:
    """Process-local storage medium shared by several sessions.

    Behaves like browser local storage: every session sees the same values,
    and a write made through one session is announced to all the others.
    """

    def __init__(self):
        self._values: dict[str, str] = {}
        self._sessions: list["InMemoryStorage"] = []

    def open_session(self) -> "InMemoryStorage":
        return InMemoryStorage(self)

    def attach(self, session: "InMemoryStorage") -> None:
        if session not in self._sessions:
            self._sessions.append(session)

    def close_session(self, session: "InMemoryStorage") -> None:
        if session in self._sessions:
            self._sessions.remove(session)

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, origin: "InMemoryStorage", key: str, value: Optional[str]) -> None:
        old_value = self._values.get(key)
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value
        if old_value == value:
            return

        event = StorageEvent(key=key, old_value=old_value, new_value=value)
        for session in list(self._sessions):
            if session is not origin:
                session.dispatch(event)


class InMemoryStorage(KeyValueStorage):
    """One session (tab) over a ``SharedMemoryMedium``."""

    def __init__(self, medium: Optional[SharedMemoryMedium] = None):
        self._medium = medium or SharedMemoryMedium()
        self._listeners: list[StorageListener] = []
        self._medium.attach(self)

    @property
    def medium(self) -> SharedMemoryMedium:
        return self._medium

    def get(self, key: str) -> Optional[str]:
        return self._medium.read(key)

    def set(self, key: str, value: str) -> None:
        self._medium.write(self, key, value)

    def remove(self, key: str) -> None:
        self._medium.write(self, key, None)

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def poll_changes(self) -> list[StorageEvent]:
        return []

    def dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for key %s", event.key)
