from __future__ import annotations

from dataclasses import dataclass

REPORT_COLUMNS = ("Date", "Day", "Nature of Work", "Time In", "Time Out", "Hours", "Remarks")
COLUMN_WIDTHS = (15, 15, 20, 15, 15, 10, 30)


@dataclass(frozen=True)
class ReportRow:
    date: str
    day: str
    nature_of_work: str
    time_in: str = ""
    time_out: str = ""
    hours: str = ""
    remarks: str = ""

    def as_tuple(self) -> tuple[str, ...]:
        return (self.date, self.day, self.nature_of_work, self.time_in, self.time_out, self.hours, self.remarks)


@dataclass(frozen=True)
class EmployeeSheet:
    user_id: str
    employee_name: str
    sheet_name: str
    rows: tuple[ReportRow, ...]


@dataclass(frozen=True)
class AttendanceReport:
    start: str
    end: str
    sheets: tuple[EmployeeSheet, ...]

    @property
    def file_name(self) -> str:
        return f"Attendance_Report_{self.start}_to_{self.end}.xlsx"
