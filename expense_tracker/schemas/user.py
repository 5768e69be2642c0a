from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from .common import Money


class IncomeUpdate(BaseModel):
    # strict types keep "100" and true from sneaking in as numbers
    income: Optional[Union[StrictInt, StrictFloat]] = None


class IncomeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    monthly_income: Money = Field(..., alias="monthlyIncome")


class BalanceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str
    monthly_income: Money = Field(..., alias="monthlyIncome")
    current_month_total: Money = Field(..., alias="currentMonthTotal")
    available_balance: Money = Field(..., alias="availableBalance")
    state: Literal["positive", "negative"]
