"""
Report endpoints: dashboard, monthly report, overview and file exports.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.report_controller import ReportController
from staff_attendance.core.access import Principal
from staff_attendance.db.session import get_db
from staff_attendance.deps.di_container import get_container
from staff_attendance.schemas.common import ApiResponse, ok
from staff_attendance.schemas.report import DashboardReport, MonthlyReport, OverviewReport
from staff_attendance.services.excel_export_service import XLSX_MEDIA_TYPE
from staff_attendance.services.pdf_export_service import PDF_MEDIA_TYPE

router = APIRouter()


def _controller(db: AsyncSession) -> ReportController:
    container = get_container()
    return ReportController(
        db,
        excel_service=container.excel_export_service(),
        pdf_service=container.pdf_export_service(),
    )


@router.get("/dashboard", response_model=ApiResponse[DashboardReport])
async def dashboard(
    day: date = Query(..., alias="date"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Status counts for one day."""
    return ok(await _controller(db).dashboard(principal, day))


@router.get("/monthly", response_model=ApiResponse[MonthlyReport])
async def monthly(
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=0, le=11, description="0 = January"),
    dept: Optional[str] = Query(None),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Per-staff day grid with counts and percentage."""
    return ok(await _controller(db).monthly(principal, year, month, dept))


@router.get("/overview", response_model=ApiResponse[OverviewReport])
async def overview(
    start: date = Query(..., alias="from"),
    end: date = Query(..., alias="to"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Staff ranked by attendance over a date range."""
    return ok(await _controller(db).overview(principal, start, end))


@router.get("/monthly/export.xlsx")
async def export_monthly_excel(
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=0, le=11),
    dept: Optional[str] = Query(None),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Download the monthly report as a spreadsheet."""
    output, filename = await _controller(db).export_excel(principal, year, month, dept)
    return StreamingResponse(
        output,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/monthly/export.pdf")
async def export_monthly_pdf(
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=0, le=11),
    dept: Optional[str] = Query(None),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Download the monthly report as a PDF."""
    output, filename = await _controller(db).export_pdf(principal, year, month, dept)
    return StreamingResponse(
        output,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
