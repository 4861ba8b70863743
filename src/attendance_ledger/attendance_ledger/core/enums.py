from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role; HR users get the company-wide views."""

    EMPLOYEE = "EMPLOYEE"
    HR = "HR"


class LogType(str, Enum):
    """Nature of a time log entry."""

    OFFICE_WORK = "OFFICE_WORK"
    SICK_LEAVE = "SICK_LEAVE"
    CASUAL_LEAVE = "CASUAL_LEAVE"
    OTHER = "OTHER"

    @property
    def is_leave(self) -> bool:
        return self is not LogType.OFFICE_WORK

    @property
    def label(self) -> str:
        return self.value.replace("_", " ", 1)


class LogStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class NotificationKind(str, Enum):
    """User-facing classification of a changed log."""

    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
