from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class EntryWindow:
    """Derived time fields of a manually entered log."""

    check_in: datetime
    check_out: datetime
    duration_minutes: int


class EntryStrategy(ABC):
    """Strategy Pattern: how a manual entry's times are derived for one log type."""

    @abstractmethod
    def build_window(self, *, day: date, start_time: Optional[str], end_time: Optional[str]) -> EntryWindow:
        raise NotImplementedError
