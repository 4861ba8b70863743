from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LogType
from .strategies.base import EntryStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.office_work_strategy import OfficeWorkStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the manual entry strategy for a log type."""

    def for_type(self, log_type: LogType) -> EntryStrategy:
        if LogType(log_type).is_leave:
            return LeaveStrategy()
        return OfficeWorkStrategy()
