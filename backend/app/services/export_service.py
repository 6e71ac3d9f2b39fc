"""Export service: CSV downloads for the reports page."""

import csv
import io
import logging
from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import Iterable, List

from app.schemas.reports import StaffPerformance, TrendPoint

logger = logging.getLogger(__name__)

REVENUE_HEADERS = ["Date", "Revenue", "Orders"]
STAFF_HEADERS = ["Staff Member", "Role", "Orders Handled", "Revenue Generated", "Efficiency Rating"]


def create_csv_export(data: Iterable[list], headers: List[str], quoting: int = csv.QUOTE_MINIMAL) -> BytesIO:
    """Create a UTF-8 CSV (with BOM, for spreadsheet apps) from rows."""
    output = BytesIO()
    output.write(b"\xef\xbb\xbf")
    text_output = io.StringIO()
    csv.writer(text_output, delimiter=",", quotechar='"', quoting=csv.QUOTE_MINIMAL).writerow(headers)
    writer = csv.writer(text_output, delimiter=",", quotechar='"', quoting=quoting)
    for row in data:
        writer.writerow(row)
    output.write(text_output.getvalue().encode("utf-8"))
    output.seek(0)
    return output


def _amount(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"))


def revenue_report_filename(start: date, end: date) -> str:
    return f"revenue_report_{start.isoformat()}_to_{end.isoformat()}.csv"


def staff_report_filename(start: date, end: date) -> str:
    return f"staff_performance_{start.isoformat()}_to_{end.isoformat()}.csv"


def export_revenue_report(trend: Iterable[TrendPoint]) -> BytesIO:
    """Daily revenue rows: Date (ISO), Revenue, Orders."""
    rows = [[point.date.isoformat(), _amount(point.revenue), point.orders] for point in trend]
    logger.info(f"Revenue report exported: {len(rows)} days")
    return create_csv_export(rows, REVENUE_HEADERS)


def export_staff_report(performance: Iterable[StaffPerformance]) -> BytesIO:
    """Staff rows; text fields are quoted and a missing rating is '-'."""
    rows = [
        [
            row.name,
            row.role,
            row.orders,
            _amount(row.revenue),
            "-" if row.rating is None else Decimal(str(row.rating)),
        ]
        for row in performance
    ]
    logger.info(f"Staff performance exported: {len(rows)} staff")
    return create_csv_export(rows, STAFF_HEADERS, quoting=csv.QUOTE_NONNUMERIC)
