"""
PDF export service for the monthly attendance report.
"""

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from staff_attendance.core.logging import get_logger
from staff_attendance.schemas.report import MonthlyReport
from staff_attendance.utils.report_format import LEGEND, header_row, month_title, staff_row

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


class PdfExportService:
    """Renders a MonthlyReport as a landscape A4 PDF."""

    def export_monthly_report(self, report: MonthlyReport) -> io.BytesIO:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            leftMargin=8 * mm,
            rightMargin=8 * mm,
            topMargin=10 * mm,
            bottomMargin=10 * mm,
            title=month_title(report),
        )
        styles = getSampleStyleSheet()

        elements = [
            Paragraph(month_title(report), styles["Title"]),
            Paragraph(LEGEND, styles["Normal"]),
            Spacer(1, 6 * mm),
        ]

        # Staff ID and Position are dropped to fit 31 day columns on the page.
        data = [_compact(header_row(report))]
        data += [_compact(staff_row(i, row)) for i, row in enumerate(report.rows, start=1)]

        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#305496")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 6),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("ALIGN", (1, 1), (1, -1), "LEFT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F2F2F2")]),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ]))
        elements.append(table)

        doc.build(elements)
        buffer.seek(0)

        logger.info(
            "Monthly report exported to PDF",
            extra={"year": report.year, "month": report.month, "rows": len(report.rows)},
        )
        return buffer


def _compact(values: list) -> list:
    """Keep #, Name, Department, then the day and total columns."""
    return [str(value) for value in [values[0], values[1], values[3]] + values[5:]]
