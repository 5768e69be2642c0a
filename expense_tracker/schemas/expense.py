from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import Money

Category = Literal["Food", "Travel", "Bills", "Other"]


class ExpenseCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    # matches the Numeric(12, 2) column
    amount: Money = Field(..., ge=0, max_digits=12, decimal_places=2, allow_inf_nan=False)
    category: Category
    date: Optional[datetime] = None  # defaults to now

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, str):
            # plain "YYYY-MM-DD" means midnight of that day
            return datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
        return v

    @field_validator("date")
    @classmethod
    def to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is not None:
            try:
                return v.astimezone(timezone.utc).replace(tzinfo=None)
            except OverflowError as e:
                raise ValueError("date out of range") from e
        return v


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    amount: Money
    category: str
    date: datetime


class CategoriesResponse(BaseModel):
    categories: List[str]
