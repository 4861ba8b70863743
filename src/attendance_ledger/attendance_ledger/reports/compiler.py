"""Expand a sparse log set into a dense per-employee daily calendar."""
from __future__ import annotations

import re
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.engine import is_on
from ..attendance.model import TimeLog
from ..common.datetime_utils import each_day, is_weekend, parse_iso_date
from ..core.constants import SHEET_NAME_MAX_LENGTH
from ..core.enums import LogType
from ..core.exceptions import ValidationError
from .model import AttendanceReport, EmployeeSheet, ReportRow

_SHEET_NAME_STRIP_RE = re.compile(r"[^\w\s]", re.ASCII)


def sanitize_sheet_name(name: str) -> str:
    return _SHEET_NAME_STRIP_RE.sub("", name or "")[:SHEET_NAME_MAX_LENGTH]


def _unique_sheet_name(name: str, taken: set[str]) -> str:
    candidate = name
    n = 2
    while candidate.lower() in taken:
        suffix = f" ({n})"
        candidate = name[: SHEET_NAME_MAX_LENGTH - len(suffix)] + suffix
        n += 1
    taken.add(candidate.lower())
    return candidate


def group_by_user(logs: Iterable[TimeLog]) -> dict[str, list[TimeLog]]:
    """Partition logs by user id, keeping first-appearance order."""
    groups: dict[str, list[TimeLog]] = {}
    for log in logs:
        groups.setdefault(log.user_id, []).append(log)
    return groups


def build_row(day: date, log: Optional[TimeLog]) -> ReportRow:
    date_str = day.strftime("%m/%d/%Y")
    day_name = day.strftime("%A")

    if log is None:
        return ReportRow(date=date_str, day=day_name, nature_of_work="" if is_weekend(day) else "ABSENT")

    if log.type == LogType.OFFICE_WORK:
        return ReportRow(
            date=date_str,
            day=day_name,
            nature_of_work="OFFICE WORK",
            time_in=log.check_in.strftime("%I:%M %p"),
            time_out=log.check_out.strftime("%I:%M %p") if log.check_out else "Active",
            hours=f"{log.duration_minutes / 60:.2f}" if log.duration_minutes else "",
            remarks=log.remarks or "",
        )

    return ReportRow(date=date_str, day=day_name, nature_of_work=log.type.label, remarks=log.remarks or "")


def compile_report(logs: Sequence[TimeLog], start: date, end: date, *, start_label: str = "", end_label: str = "") -> AttendanceReport:
    """One sheet per user found in ``logs``, one row per day of [start, end].

    When a day holds several logs for a user the first one in storage order
    is reported. Users with no logs at all are not known here and are skipped.
    """
    if start > end:
        raise ValidationError("Start date must not be after end date")

    days = list(each_day(start, end))
    taken: set[str] = set()
    sheets = []

    for user_id, user_logs in group_by_user(logs).items():
        employee_name = user_logs[0].user_name or f"User {user_id}"
        rows = tuple(build_row(day, next((l for l in user_logs if is_on(day, l)), None)) for day in days)
        sheet_name = sanitize_sheet_name(employee_name) or sanitize_sheet_name(f"User {user_id}")
        sheets.append(
            EmployeeSheet(
                user_id=user_id,
                employee_name=employee_name,
                sheet_name=_unique_sheet_name(sheet_name, taken),
                rows=rows,
            )
        )

    return AttendanceReport(
        start=start_label or start.isoformat(),
        end=end_label or end.isoformat(),
        sheets=tuple(sheets),
    )


def build_report(logs: Sequence[TimeLog], start_raw: Optional[str], end_raw: Optional[str]) -> AttendanceReport:
    """Validate the caller's range strings and compile the report.

    The strings are kept verbatim for the file name.
    """
    if not start_raw or not end_raw:
        raise ValidationError("Please select both start and end dates.")
    try:
        start = parse_iso_date(start_raw)
        end = parse_iso_date(end_raw)
    except ValueError as e:
        raise ValidationError(f"Invalid date range: {e}") from e

    if not logs:
        raise ValidationError("No data found.")

    return compile_report(logs, start, end, start_label=start_raw, end_label=end_raw)
