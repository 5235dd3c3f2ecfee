"""
Report controller.
Computes reports and hands the monthly report to the exporters.
"""

import io
from datetime import date
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.controllers.base_controller import BaseController
from staff_attendance.core.access import Principal
from staff_attendance.schemas.report import DashboardReport, MonthlyReport, OverviewReport
from staff_attendance.services.excel_export_service import ExcelExportService
from staff_attendance.services.pdf_export_service import PdfExportService
from staff_attendance.services.report_service import ReportService
from staff_attendance.utils.report_format import export_filename


class ReportController(BaseController):
    """Controller for dashboard, monthly report, overview and exports."""

    def __init__(
        self,
        session: AsyncSession,
        excel_service: ExcelExportService = None,
        pdf_service: PdfExportService = None,
    ):
        self.report_service = ReportService(session)
        self.excel_service = excel_service or ExcelExportService()
        self.pdf_service = pdf_service or PdfExportService()

    async def dashboard(self, principal: Principal, day: date) -> DashboardReport:
        return await self.report_service.dashboard(principal, day)

    async def monthly(
        self,
        principal: Principal,
        year: int,
        month: int,
        department: Optional[str] = None,
    ) -> MonthlyReport:
        return await self.report_service.monthly(principal, year, month, department)

    async def overview(self, principal: Principal, start: date, end: date) -> OverviewReport:
        return await self.report_service.overview(principal, start, end)

    async def export_excel(
        self,
        principal: Principal,
        year: int,
        month: int,
        department: Optional[str] = None,
    ) -> Tuple[io.BytesIO, str]:
        """Returns the workbook and its download filename."""
        report = await self.monthly(principal, year, month, department)
        return self.excel_service.export_monthly_report(report), export_filename(report, "xlsx")

    async def export_pdf(
        self,
        principal: Principal,
        year: int,
        month: int,
        department: Optional[str] = None,
    ) -> Tuple[io.BytesIO, str]:
        """Returns the PDF and its download filename."""
        report = await self.monthly(principal, year, month, department)
        return self.pdf_service.export_monthly_report(report), export_filename(report, "pdf")
