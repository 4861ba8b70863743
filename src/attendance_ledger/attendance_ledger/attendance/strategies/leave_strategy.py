from __future__ import annotations

from datetime import date
from typing import Optional

from ...common.datetime_utils import start_of_day
from .base import EntryStrategy, EntryWindow


class LeaveStrategy(EntryStrategy):
    """Leave day: check-in and check-out both mark the start of the day."""

    def build_window(self, *, day: date, start_time: Optional[str], end_time: Optional[str]) -> EntryWindow:
        marker = start_of_day(day)
        return EntryWindow(check_in=marker, check_out=marker, duration_minutes=0)
