from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol


@dataclass(frozen=True)
class StorageEvent:
    """A value changed in another session of the same storage medium.

    Carries the whole serialized document before and after the write,
    never a diff.
    """

    key: str
    old_value: Optional[str]
    new_value: Optional[str]


StorageListener = Callable[[StorageEvent], None]


class KeyValueStorage(Protocol):
    """Storage port used by the ledger.

    Reads and writes are synchronous within a session. Writes made by other
    sessions arrive later through ``subscribe``.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        """Register for changes made by other sessions; returns an unsubscribe callable."""
        raise NotImplementedError

    def poll_changes(self) -> list[StorageEvent]:
        """Announce writes made by other sessions that were not pushed yet.

        Push-based media return an empty list.
        """
        raise NotImplementedError
