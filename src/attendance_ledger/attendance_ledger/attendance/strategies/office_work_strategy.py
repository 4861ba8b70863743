from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import parse_clock_time, whole_minutes_between
from ...common.validators import require_non_empty
from ...core.exceptions import ValidationError
from .base import EntryStrategy, EntryWindow


class OfficeWorkStrategy(EntryStrategy):
    """Worked shift: start and end clock times on the entry's date."""

    def build_window(self, *, day: date, start_time: Optional[str], end_time: Optional[str]) -> EntryWindow:
        start = datetime.combine(day, parse_clock_time(require_non_empty(start_time, "Start time")))
        end = datetime.combine(day, parse_clock_time(require_non_empty(end_time, "End time")))

        if end <= start:
            raise ValidationError("End time must be after start time")

        return EntryWindow(check_in=start, check_out=end, duration_minutes=whole_minutes_between(end, start))
