from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import from_iso, parse_iso_date, to_iso
from ..core.enums import LogStatus, LogType


@dataclass(frozen=True)
class TimeLog:
    """Domain entity: one attendance record (a work shift or a leave day).

    ``user_name`` is a snapshot taken when the entry was created. It is not
    updated when the user changes and must not be treated as authoritative.
    """

    id: str
    user_id: str
    user_name: str
    type: LogType
    check_in: datetime
    status: LogStatus
    date: str
    check_out: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    remarks: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == LogStatus.ACTIVE

    @property
    def work_date(self) -> Optional[date]:
        try:
            return parse_iso_date(self.date)
        except (TypeError, ValueError):
            return None

    @property
    def last_event_at(self) -> datetime:
        """Check-out when closed, otherwise check-in."""
        return self.check_out or self.check_in

    def with_changes(self, **changes: Any) -> "TimeLog":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "type": self.type.value,
            "checkIn": to_iso(self.check_in),
            "status": self.status.value,
            "date": self.date,
        }
        if self.check_out is not None:
            data["checkOut"] = to_iso(self.check_out)
        if self.duration_minutes is not None:
            data["durationMinutes"] = self.duration_minutes
        if self.remarks is not None:
            data["remarks"] = self.remarks
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeLog":
        duration = data.get("durationMinutes")
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            user_name=str(data.get("userName") or ""),
            type=LogType(data["type"]),
            check_in=from_iso(data["checkIn"]),
            status=LogStatus(data["status"]),
            date=str(data["date"]),
            check_out=from_iso(data.get("checkOut")),
            duration_minutes=int(duration) if duration is not None else None,
            remarks=data.get("remarks"),
        )


@dataclass(frozen=True)
class TodaySummary:
    """Read-model for the employee dashboard header."""

    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    total_minutes: int
    active_entry: Optional[TimeLog] = None
    elapsed_seconds: int = 0

    @property
    def total_display(self) -> str:
        return f"{self.total_minutes // 60}h {self.total_minutes % 60}m"
