from datetime import datetime
from typing import Iterable


def current_month_total(expenses: Iterable, now: datetime):
    """Sum of ``amount`` for expenses dated in the same year and month as ``now``."""
    return sum(
        (e.amount for e in expenses if e.date.year == now.year and e.date.month == now.month),
        0,
    )


def available_balance(monthly_income, current_month_total):
    # may go negative; no rounding or clamping
    return monthly_income - current_month_total


def balance_state(balance) -> str:
    return "positive" if balance >= 0 else "negative"
