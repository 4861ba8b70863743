from __future__ import annotations

from typing import Optional

from ..attendance.repository import TimeLogRepository
from .compiler import build_report
from .excel import write_workbook
from .model import AttendanceReport


class AttendanceReportService:
    """Use case: HR export over a date range from the current ledger snapshot."""

    def __init__(self, logs: TimeLogRepository):
        self._logs = logs

    def build_attendance_report(self, *, start: Optional[str], end: Optional[str]) -> AttendanceReport:
        return build_report(list(self._logs.list_logs()), start, end)

    def export_workbook(self, *, start: Optional[str], end: Optional[str]) -> tuple[str, bytes]:
        report = self.build_attendance_report(start=start, end=end)
        return report.file_name, write_workbook(report)
