"""Aggregations behind the reports page and the dashboards.

Pure functions over order and staff lists. Date windows are inclusive at both
ends and compare the order's calendar date in the restaurant's local zone.
Empty input always gives zero or empty output.
"""

from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from app.core.config import settings
from app.models.enums import TAKEAWAY, ItemCategory, OrderStatus, StaffRole, TableStatus
from app.schemas.order import Order
from app.schemas.reports import (
    CategoryPerformance,
    HourlyTraffic,
    ManagerDashboard,
    OrderSource,
    PersonalMetrics,
    ReportSummary,
    StaffPerformance,
    TrendPoint,
    WeekdayRevenue,
)
from app.schemas.staff import Staff
from app.schemas.tables import Table

ZERO = Decimal("0")
FIRST_REPORTED_HOUR = 8


def _tz(tz: Optional[tzinfo]) -> tzinfo:
    return tz or settings.tzinfo


def local_date(order: Order, tz: Optional[tzinfo] = None) -> date:
    return order.timestamp.astimezone(_tz(tz)).date()


def _round_half_up(value: Decimal, places: str = "1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _days(start: date, end: date) -> List[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def day_label(day: date) -> str:
    """Short month and day, e.g. 'Oct 5'."""
    return f"{day.strftime('%b')} {day.day}"


def filter_orders(orders: Iterable[Order], start: date, end: date, tz: Optional[tzinfo] = None) -> List[Order]:
    """Non-cancelled orders whose local date lies in [start, end]."""
    return [
        o for o in orders
        if o.status != OrderStatus.CANCELLED and start <= local_date(o, tz) <= end
    ]


def period_revenue(orders: Iterable[Order]) -> Decimal:
    return sum((o.total for o in orders), ZERO)


def daily_trend(orders: Iterable[Order], start: date, end: date, tz: Optional[tzinfo] = None) -> List[TrendPoint]:
    """One point per day of the window, zero-filled."""
    revenue: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    counts: Counter = Counter()
    for order in orders:
        day = local_date(order, tz)
        revenue[day] += order.total
        counts[day] += 1
    return [
        TrendPoint(date=day, label=day_label(day), revenue=revenue[day], orders=counts[day])
        for day in _days(start, end)
    ]


def category_performance(orders: Iterable[Order]) -> List[CategoryPerformance]:
    """Line revenue (price x qty, pre-tax) per category, highest first."""
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for order in orders:
        for item in order.items:
            totals[ItemCategory(item.category).label] += item.line_total
    rows = [CategoryPerformance(name=name, value=value) for name, value in totals.items()]
    rows.sort(key=lambda row: row.value, reverse=True)
    return rows


def hourly_traffic(orders: Iterable[Order], tz: Optional[tzinfo] = None) -> List[HourlyTraffic]:
    """Order counts per local hour; hours before 08:00 are not reported."""
    counts = [0] * 24
    for order in orders:
        counts[order.timestamp.astimezone(_tz(tz)).hour] += 1
    return [
        HourlyTraffic(hour=hour, label=f"{hour}:00", orders=counts[hour])
        for hour in range(FIRST_REPORTED_HOUR, 24)
    ]


def order_sources(orders: Iterable[Order]) -> List[OrderSource]:
    """Dine-in vs takeaway as whole percentages; empty when there are no orders."""
    orders = list(orders)
    total = len(orders)
    if total == 0:
        return []
    takeaway = sum(1 for o in orders if o.table_id == TAKEAWAY)
    dine_in = total - takeaway

    def pct(n: int) -> int:
        return int(_round_half_up(Decimal(n * 100) / Decimal(total)))

    return [
        OrderSource(name="Dine In", value=pct(dine_in)),
        OrderSource(name="Takeaway", value=pct(takeaway)),
    ]


def efficiency_rating(revenue: Decimal, orders: int) -> Optional[float]:
    """clamp(avg order value / 50 + 2.5, 1, 5) to one decimal; None without orders."""
    if orders == 0:
        return None
    raw = revenue / orders / Decimal(50) + Decimal("2.5")
    clamped = min(Decimal(5), max(Decimal(1), raw))
    return float(_round_half_up(clamped, "0.1"))


def staff_performance(
    orders: Iterable[Order],
    staff: Iterable[Staff],
    role: Optional[str] = None,
    search: Optional[str] = None,
) -> List[StaffPerformance]:
    revenue: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: Counter = Counter()
    for order in orders:
        if order.staff_id:
            revenue[order.staff_id] += order.total
            counts[order.staff_id] += 1

    role_filter = (role or "").strip().upper()
    if role_filter == "ALL":
        role_filter = ""
    name_filter = (search or "").strip().lower()

    rows = []
    for member in staff:
        member_role = StaffRole(member.role).value
        if role_filter and role_filter not in member_role:
            continue
        if name_filter and name_filter not in member.name.lower():
            continue
        rows.append(StaffPerformance(
            id=member.id,
            name=member.name,
            role=member_role,
            orders=counts[member.id],
            revenue=revenue[member.id],
            rating=efficiency_rating(revenue[member.id], counts[member.id]),
        ))
    rows.sort(key=lambda row: row.revenue, reverse=True)
    return rows


def report_summary(orders: Iterable[Order]) -> ReportSummary:
    orders = list(orders)
    total = period_revenue(orders)
    count = len(orders)
    average = (total / count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) if count else ZERO
    return ReportSummary(
        total_revenue=total,
        total_orders=count,
        average_order_value=average,
        unique_guests=len({o.customer_name for o in orders}),
    )


# ============== Dashboards ==============

def personal_metrics(orders: Iterable[Order], staff_id: str) -> PersonalMetrics:
    """All-time figures for one staff member (cancelled orders included)."""
    mine = [o for o in orders if o.staff_id == staff_id]
    return PersonalMetrics(
        orders=len(mine),
        revenue=period_revenue(mine),
        pending=sum(1 for o in mine if o.status == OrderStatus.PENDING),
    )


def manager_dashboard(
    orders: Iterable[Order],
    tables: Iterable[Table],
    today: date,
    tz: Optional[tzinfo] = None,
) -> ManagerDashboard:
    orders = list(orders)
    tables = list(tables)
    todays = [o for o in orders if local_date(o, tz) == today]
    week_start = today - timedelta(days=6)
    week_revenue: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    for order in orders:
        day = local_date(order, tz)
        if order.status != OrderStatus.CANCELLED and week_start <= day <= today:
            week_revenue[day] += order.total

    return ManagerDashboard(
        revenue_today=period_revenue(o for o in todays if o.status != OrderStatus.CANCELLED),
        orders_today=len(todays),
        occupied_tables=sum(1 for t in tables if t.status == TableStatus.OCCUPIED),
        total_tables=len(tables),
        weekly_trend=[
            WeekdayRevenue(day=day.strftime("%a"), date=day, revenue=week_revenue[day])
            for day in _days(week_start, today)
        ],
    )


def best_selling_item(orders: Iterable[Order], day: date, tz: Optional[tzinfo] = None) -> Optional[str]:
    """Most ordered item (by quantity) among the day's non-cancelled orders."""
    quantities: Counter = Counter()
    for order in orders:
        if order.status != OrderStatus.CANCELLED and local_date(order, tz) == day:
            for item in order.items:
                quantities[item.name] += item.quantity
    if not quantities:
        return None
    return quantities.most_common(1)[0][0]


def today_local(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> date:
    now = now or datetime.now(_tz(tz))
    return now.astimezone(_tz(tz)).date()
