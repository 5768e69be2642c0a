"""
Monthly and daily spending summaries.

Buckets are keyed on the calendar components (year, month, day) of each
expense's stored timestamp, taken verbatim. No timezone conversion happens
here: whatever the stored value says is the day it counts toward.
"""

import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from expense_tracker.core.errors import ValidationError
from expense_tracker.db import crud
from expense_tracker.schemas.expense_summary import DailyBucket, DailySummaryResponse, MonthlyBucket

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def month_label(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_month(month: str) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` string into ``(year, month)``."""
    if not isinstance(month, str) or not MONTH_PATTERN.match(month):
        raise ValidationError("A valid month query (YYYY-MM) is required")
    year, month_num = int(month[:4]), int(month[5:])
    if not 1 <= month_num <= 12 or year < 1:
        raise ValidationError("A valid month query (YYYY-MM) is required")
    return year, month_num


def month_range(year: int, month: int) -> Tuple[datetime, Optional[datetime]]:
    """
    Half-open ``[start, end)`` range covering one calendar month.
    ``end`` is None for the last representable month (December 9999).
    """
    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1) if year < datetime.max.year else None
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def group_by_month(rows: Iterable[Tuple[datetime, object]]) -> List[MonthlyBucket]:
    totals: Dict[Tuple[int, int], object] = {}
    for date, amount in rows:
        key = (date.year, date.month)
        totals[key] = totals.get(key, 0) + amount

    return [
        MonthlyBucket(label=month_label(year, month), total=totals[(year, month)])
        for year, month in sorted(totals)
    ]


def group_by_day(rows: Iterable[Tuple[datetime, object]]) -> List[DailyBucket]:
    totals: Dict[int, object] = {}
    for date, amount in rows:
        totals[date.day] = totals.get(date.day, 0) + amount

    return [DailyBucket(day=day, total=totals[day]) for day in sorted(totals)]


def monthly_summary(db: Session, owner_id: int) -> List[MonthlyBucket]:
    return group_by_month(crud.iter_expense_amounts(db, owner_id))


def daily_summary(db: Session, owner_id: int, month: str) -> DailySummaryResponse:
    # validated before the store is touched
    year, month_num = parse_month(month)
    start, end = month_range(year, month_num)

    rows = crud.iter_expense_amounts(db, owner_id, start=start, end=end)
    return DailySummaryResponse(month=month, days=group_by_day(rows))
