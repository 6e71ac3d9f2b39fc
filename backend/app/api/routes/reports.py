"""Reporting routes: summaries, charts data, dashboards and CSV exports."""

from datetime import date, timedelta
from typing import List, Optional, Tuple

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from app.core.rbac import MANAGEMENT_ROLES, CurrentStaff, RequireManager, has_role
from app.schemas.reports import (
    CategoryPerformance,
    DashboardResponse,
    HourlyTraffic,
    OrderSource,
    ReportSummary,
    StaffPerformance,
    TrendPoint,
)
from app.services import export_service, reporting_service
from app.services.app_state import AppStateDep

router = APIRouter()

DEFAULT_WINDOW_DAYS = 7


def _window(start: Optional[date], end: Optional[date]) -> Tuple[date, date]:
    """Default window: the last seven days up to today."""
    end = end or reporting_service.today_local()
    start = start or end - timedelta(days=DEFAULT_WINDOW_DAYS)
    if start > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must not be after end")
    return start, end


def _filtered(state, start, end):
    return reporting_service.filter_orders(state.orders, start, end)


@router.get("/summary", response_model=ReportSummary)
def report_summary(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    return reporting_service.report_summary(_filtered(state, start, end))


@router.get("/trend", response_model=List[TrendPoint])
def revenue_trend(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    return reporting_service.daily_trend(_filtered(state, start, end), start, end)


@router.get("/categories", response_model=List[CategoryPerformance])
def category_performance(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    return reporting_service.category_performance(_filtered(state, start, end))


@router.get("/hourly", response_model=List[HourlyTraffic])
def hourly_traffic(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    return reporting_service.hourly_traffic(_filtered(state, start, end))


@router.get("/sources", response_model=List[OrderSource])
def order_sources(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    return reporting_service.order_sources(_filtered(state, start, end))


@router.get("/staff", response_model=List[StaffPerformance])
def staff_performance(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
    role: Optional[str] = Query(None, max_length=20),
    search: Optional[str] = Query(None, max_length=100),
):
    start, end = _window(start, end)
    return reporting_service.staff_performance(_filtered(state, start, end), state.staff, role, search)


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(current_staff: CurrentStaff, state: AppStateDep):
    """Personal figures for everyone; managers and admins also get the floor overview."""
    personal = reporting_service.personal_metrics(state.orders, current_staff.id)
    manager = None
    if has_role(current_staff, MANAGEMENT_ROLES):
        manager = reporting_service.manager_dashboard(
            state.orders, state.tables, reporting_service.today_local()
        )
    return DashboardResponse(personal=personal, manager=manager)


@router.get("/export/revenue.csv")
def export_revenue(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    start, end = _window(start, end)
    trend = reporting_service.daily_trend(_filtered(state, start, end), start, end)
    output = export_service.export_revenue_report(trend)
    filename = export_service.revenue_report_filename(start, end)
    return StreamingResponse(output, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})


@router.get("/export/staff.csv")
def export_staff(
    current_staff: RequireManager,
    state: AppStateDep,
    start: Optional[date] = None,
    end: Optional[date] = None,
    role: Optional[str] = Query(None, max_length=20),
    search: Optional[str] = Query(None, max_length=100),
):
    start, end = _window(start, end)
    rows = reporting_service.staff_performance(_filtered(state, start, end), state.staff, role, search)
    output = export_service.export_staff_report(rows)
    filename = export_service.staff_report_filename(start, end)
    return StreamingResponse(output, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
