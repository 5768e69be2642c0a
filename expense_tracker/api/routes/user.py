from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expense_tracker.api.deps import current_user, get_db
from expense_tracker.db import crud
from expense_tracker.schemas.user import BalanceResponse, IncomeResponse, IncomeUpdate
from expense_tracker.services import aggregation, balance, income
from expense_tracker.services.auth_service import AuthContext

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/income", response_model=IncomeResponse)
def get_income(ctx: AuthContext = Depends(current_user)):
    return IncomeResponse(monthly_income=income.get_income(ctx.user))


@router.post("/income", response_model=IncomeResponse)
def set_income(
    payload: IncomeUpdate,
    ctx: AuthContext = Depends(current_user),
    db: Session = Depends(get_db),
):
    return IncomeResponse(monthly_income=income.set_income(db, ctx.user, payload.income))


@router.get("/balance", response_model=BalanceResponse)
def get_balance(ctx: AuthContext = Depends(current_user), db: Session = Depends(get_db)):
    now = datetime.utcnow()
    start, end = aggregation.month_range(now.year, now.month)
    expenses = crud.find_expenses(db, ctx.user.id, start=start, end=end)

    spent = balance.current_month_total(expenses, now)
    monthly_income = income.get_income(ctx.user)
    available = balance.available_balance(monthly_income, spent)

    return BalanceResponse(
        month=aggregation.month_label(now.year, now.month),
        monthly_income=monthly_income,
        current_month_total=spent,
        available_balance=available,
        state=balance.balance_state(available),
    )
