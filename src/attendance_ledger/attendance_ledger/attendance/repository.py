from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimeLog


class TimeLogRepository(Protocol):
    def list_logs(self) -> Sequence[TimeLog]:
        """All logs in insertion order."""
        raise NotImplementedError

    def get_active_log(self, user_id: str) -> Optional[TimeLog]:
        raise NotImplementedError

    def save_log(self, log: TimeLog) -> None:
        """Insert when the id is new, replace in place when it exists."""
        raise NotImplementedError
