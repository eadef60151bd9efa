# app/utils/aggregation.py
"""Derived totals behind the dashboard cards and charts."""
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from app.models.expense import Expense, ExpenseCategory


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; treat them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def summarize_expenses(expenses: Iterable[Expense], now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Totals for one user's expenses: overall, current calendar month (UTC),
    per category (enum order, empty categories left out), per day and per
    month (both sorted by key). Amounts are rounded to cents.
    """
    now = _as_utc(now or datetime.now(timezone.utc))

    total = 0.0
    month_total = 0.0
    count = 0
    by_category: Dict[ExpenseCategory, float] = defaultdict(float)
    by_day: Dict[str, float] = defaultdict(float)
    by_month: Dict[str, float] = defaultdict(float)

    for expense in expenses:
        created = _as_utc(expense.created_at)
        amount = float(expense.amount)

        count += 1
        total += amount
        if created.year == now.year and created.month == now.month:
            month_total += amount

        by_category[ExpenseCategory(expense.category)] += amount
        by_day[created.strftime("%Y-%m-%d")] += amount
        by_month[created.strftime("%Y-%m")] += amount

    return {
        "total": round(total, 2),
        "month_total": round(month_total, 2),
        "count": count,
        "by_category": [
            {"category": category, "total": round(by_category[category], 2)}
            for category in ExpenseCategory
            if category in by_category
        ],
        "by_day": [{"date": day, "total": round(by_day[day], 2)} for day in sorted(by_day)],
        "by_month": [{"month": month, "total": round(by_month[month], 2)} for month in sorted(by_month)],
    }
