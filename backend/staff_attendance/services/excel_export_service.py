"""
Excel export service for the monthly attendance report.
"""

import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from staff_attendance.core.logging import get_logger
from staff_attendance.schemas.report import MonthlyReport
from staff_attendance.utils.report_format import (
    LEADING_COLUMNS,
    LEGEND,
    header_row,
    month_title,
    staff_row,
)

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FILL = PatternFill(start_color="305496", end_color="305496", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
CODE_FILLS = {
    "P": PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
    "A": PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"),
    "H": PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
    "Ho": PatternFill(start_color="BDD7EE", end_color="BDD7EE", fill_type="solid"),
    "W": PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid"),
}


class ExcelExportService:
    """Renders a MonthlyReport as an .xlsx workbook."""

    def export_monthly_report(self, report: MonthlyReport) -> io.BytesIO:
        """
        Build the workbook.

        Layout: title row, legend row, blank row, header row, one row per staff member.

        Returns:
            Rewound in-memory .xlsx file
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Attendance"

        headers = header_row(report)
        ws.append([month_title(report)])
        ws["A1"].font = Font(bold=True, size=14)
        ws.append([LEGEND])
        ws.append([])
        ws.append(headers)

        header_index = ws.max_row
        for cell in ws[header_index]:
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center")

        first_day_col = len(LEADING_COLUMNS) + 1
        last_day_col = len(LEADING_COLUMNS) + report.days_in_month
        for position, row in enumerate(report.rows, start=1):
            ws.append(staff_row(position, row))
            for col in range(first_day_col, last_day_col + 1):
                cell = ws.cell(row=ws.max_row, column=col)
                cell.alignment = Alignment(horizontal="center")
                fill = CODE_FILLS.get(cell.value)
                if fill is not None:
                    cell.fill = fill

        ws.freeze_panes = ws.cell(row=header_index + 1, column=first_day_col)
        ws.column_dimensions["A"].width = 5
        ws.column_dimensions["B"].width = 24
        ws.column_dimensions["C"].width = 12
        ws.column_dimensions["D"].width = 16
        ws.column_dimensions["E"].width = 16
        for col in range(first_day_col, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 4 if col <= last_day_col else 10

        output = io.BytesIO()
        wb.save(output)
        output.seek(0)

        logger.info(
            "Monthly report exported to Excel",
            extra={"year": report.year, "month": report.month, "rows": len(report.rows)},
        )
        return output
