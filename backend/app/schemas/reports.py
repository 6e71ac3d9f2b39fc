"""Report and dashboard schemas."""

from datetime import date
from typing import List, Optional

from app.schemas.common import CamelModel, Money


class TrendPoint(CamelModel):
    date: date
    label: str
    revenue: Money
    orders: int


class CategoryPerformance(CamelModel):
    name: str
    value: Money


class HourlyTraffic(CamelModel):
    hour: int
    label: str
    orders: int


class OrderSource(CamelModel):
    name: str
    value: int


class StaffPerformance(CamelModel):
    id: str
    name: str
    role: str
    orders: int
    revenue: Money
    rating: Optional[float] = None


class ReportSummary(CamelModel):
    total_revenue: Money
    total_orders: int
    average_order_value: Money
    unique_guests: int


class PersonalMetrics(CamelModel):
    orders: int
    revenue: Money
    pending: int


class WeekdayRevenue(CamelModel):
    day: str
    date: date
    revenue: Money


class ManagerDashboard(CamelModel):
    revenue_today: Money
    orders_today: int
    occupied_tables: int
    total_tables: int
    weekly_trend: List[WeekdayRevenue]


class DashboardResponse(CamelModel):
    personal: PersonalMetrics
    manager: Optional[ManagerDashboard] = None
