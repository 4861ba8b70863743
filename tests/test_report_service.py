from __future__ import annotations

import pytest

from src.attendance_ledger.attendance_ledger.attendance import engine
from src.attendance_ledger.attendance_ledger.core.exceptions import ValidationError
from src.attendance_ledger.attendance_ledger.reports.service import AttendanceReportService


class FakeLogsRepo:
    def __init__(self, logs):
        self._logs = logs
        self.calls = 0

    def list_logs(self):
        self.calls += 1
        return list(self._logs)


def test_report_is_built_from_repository_snapshot(alex):
    log = engine.manual_entry(alex, day="2026-02-03", log_type="OFFICE_WORK", start_time="09:00", end_time="17:00")
    repo = FakeLogsRepo([log])

    report = AttendanceReportService(repo).build_attendance_report(start="2026-02-02", end="2026-02-04")

    assert repo.calls == 1
    assert [s.employee_name for s in report.sheets] == ["Alex Rivera"]
    assert [r.nature_of_work for r in report.sheets[0].rows] == ["ABSENT", "OFFICE WORK", "ABSENT"]


def test_export_returns_named_workbook(alex):
    log = engine.manual_entry(alex, day="2026-02-03", log_type="SICK_LEAVE")

    filename, payload = AttendanceReportService(FakeLogsRepo([log])).export_workbook(start="2026-02-02", end="2026-02-08")

    assert filename == "Attendance_Report_2026-02-02_to_2026-02-08.xlsx"
    assert payload[:2] == b"PK"


def test_export_without_logs_is_rejected():
    with pytest.raises(ValidationError, match="No data found"):
        AttendanceReportService(FakeLogsRepo([])).export_workbook(start="2026-02-02", end="2026-02-08")
