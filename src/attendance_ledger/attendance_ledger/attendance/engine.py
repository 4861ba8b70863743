"""Attendance rules on TimeLog collections.

Everything here is pure: functions take the current logs and the current
instant and return new values. Persisting and notifying is the service's job.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, seconds_between, whole_minutes_between
from ..common.validators import require_non_empty
from ..core.enums import LogStatus, LogType
from ..core.exceptions import PreconditionError, ValidationError
from ..users.model import User
from .factory import AttendanceStrategyFactory
from .model import TimeLog, TodaySummary


def new_log_id() -> str:
    return str(uuid.uuid4())


def find_active(logs: Iterable[TimeLog], user_id: str) -> Optional[TimeLog]:
    return next((log for log in logs if log.user_id == user_id and log.is_active), None)


def start_work(user: User, now: datetime) -> TimeLog:
    return TimeLog(
        id=new_log_id(),
        user_id=user.id,
        user_name=user.name,
        type=LogType.OFFICE_WORK,
        check_in=now,
        status=LogStatus.ACTIVE,
        date=now.date().isoformat(),
    )


def check_in(logs: Sequence[TimeLog], user: User, now: datetime) -> TimeLog:
    """Open a work session, refusing a second active entry for the user."""
    if find_active(logs, user.id) is not None:
        raise PreconditionError(f"{user.name} is already checked in")
    return start_work(user, now)


def close_work(entry: Optional[TimeLog], now: datetime) -> TimeLog:
    if entry is None or not entry.is_active:
        raise PreconditionError("There is no active entry to check out")
    if now < entry.check_in:
        raise PreconditionError(f"Check-out time {now} is before check-in {entry.check_in}")

    return entry.with_changes(
        check_out=now,
        status=LogStatus.COMPLETED,
        duration_minutes=whole_minutes_between(now, entry.check_in),
    )


def manual_entry(
    user: User,
    *,
    day: str,
    log_type: LogType | str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    notes: Optional[str] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> TimeLog:
    """Build a completed entry from form values.

    Same-day entries are not checked for overlap.
    """
    day = require_non_empty(day, "Date")
    try:
        work_date = parse_iso_date(day)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {day!r}") from e
    try:
        log_type = LogType(log_type)
    except ValueError as e:
        raise ValidationError(f"Unknown entry type: {log_type!r}") from e

    strategy = (factory or AttendanceStrategyFactory()).for_type(log_type)
    window = strategy.build_window(day=work_date, start_time=start_time, end_time=end_time)

    return TimeLog(
        id=new_log_id(),
        user_id=user.id,
        user_name=user.name,
        type=log_type,
        check_in=window.check_in,
        check_out=window.check_out,
        duration_minutes=window.duration_minutes,
        status=LogStatus.COMPLETED,
        date=work_date.isoformat(),
        remarks=notes,
    )


def elapsed_seconds(entry: Optional[TimeLog], now: datetime) -> int:
    """Live running time of an active entry; recomputed on every tick."""
    if entry is None or not entry.is_active:
        return 0
    return max(seconds_between(now, entry.check_in), 0)


def user_history(logs: Iterable[TimeLog], user_id: str) -> list[TimeLog]:
    items = [log for log in logs if log.user_id == user_id]
    items.sort(key=lambda log: log.check_in, reverse=True)
    return items


def summarize_today(logs: Iterable[TimeLog], user_id: str, now: datetime) -> TodaySummary:
    mine = [log for log in logs if log.user_id == user_id]
    today = now.date().isoformat()
    todays = [log for log in mine if log.date == today]

    work = [log for log in todays if log.type == LogType.OFFICE_WORK]
    first_check_in = min((log.check_in for log in work), default=None)
    last_check_out = max(
        (log.check_out for log in work if log.status == LogStatus.COMPLETED and log.check_out),
        default=None,
    )

    active = find_active(mine, user_id)
    elapsed = elapsed_seconds(active, now)
    total = sum(log.duration_minutes or 0 for log in todays) + elapsed // 60

    return TodaySummary(
        first_check_in=first_check_in,
        last_check_out=last_check_out,
        total_minutes=total,
        active_entry=active,
        elapsed_seconds=elapsed,
    )


def is_on(day: date, log: TimeLog) -> bool:
    return log.date == day.isoformat()
