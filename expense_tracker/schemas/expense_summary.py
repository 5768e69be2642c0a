from typing import List

from pydantic import BaseModel

from .common import Money


class MonthlyBucket(BaseModel):
    label: str  # "YYYY-MM"
    total: Money


class DailyBucket(BaseModel):
    day: int  # 1..31
    total: Money


class DailySummaryResponse(BaseModel):
    month: str
    days: List[DailyBucket] = []
