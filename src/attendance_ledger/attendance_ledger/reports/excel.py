from __future__ import annotations

import io

import pandas as pd
from openpyxl.utils import get_column_letter

from .model import COLUMN_WIDTHS, REPORT_COLUMNS, AttendanceReport

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_frames(report: AttendanceReport) -> dict[str, pd.DataFrame]:
    return {
        sheet.sheet_name: pd.DataFrame([row.as_tuple() for row in sheet.rows], columns=list(REPORT_COLUMNS))
        for sheet in report.sheets
    }


def write_workbook(report: AttendanceReport) -> bytes:
    """Render the report as an .xlsx workbook, one worksheet per employee."""
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for sheet_name, df in report_frames(report).items():
            df.to_excel(writer, index=False, sheet_name=sheet_name)
            worksheet = writer.sheets[sheet_name]
            for idx, width in enumerate(COLUMN_WIDTHS, start=1):
                worksheet.column_dimensions[get_column_letter(idx)].width = width
    return output.getvalue()
