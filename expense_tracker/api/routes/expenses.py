from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from expense_tracker.api.deps import current_user, get_db
from expense_tracker.core.config import CATEGORIES
from expense_tracker.core.errors import NotFoundError
from expense_tracker.db import crud
from expense_tracker.schemas.auth import MessageResponse
from expense_tracker.schemas.expense import CategoriesResponse, ExpenseCreate, ExpenseOut
from expense_tracker.schemas.expense_summary import DailySummaryResponse, MonthlyBucket
from expense_tracker.services import aggregation
from expense_tracker.services.auth_service import AuthContext

router = APIRouter(prefix="/api/expenses", tags=["expenses"])

_MAX_ID = 2**63 - 1


@router.post("", response_model=ExpenseOut, status_code=201)
def create_expense(
    payload: ExpenseCreate,
    ctx: AuthContext = Depends(current_user),
    db: Session = Depends(get_db),
):
    expense = crud.create_expense(
        db,
        owner_id=ctx.user.id,
        title=payload.title,
        amount=payload.amount,
        category=payload.category,
        date=payload.date,
    )
    return ExpenseOut.model_validate(expense)


@router.get("", response_model=List[ExpenseOut])
def list_expenses(ctx: AuthContext = Depends(current_user), db: Session = Depends(get_db)):
    return [ExpenseOut.model_validate(e) for e in crud.find_expenses(db, ctx.user.id)]


@router.get("/categories", response_model=CategoriesResponse)
def categories(ctx: AuthContext = Depends(current_user)):
    return CategoriesResponse(categories=list(CATEGORIES))


@router.get("/summary/monthly", response_model=List[MonthlyBucket])
def monthly_summary(ctx: AuthContext = Depends(current_user), db: Session = Depends(get_db)):
    return aggregation.monthly_summary(db, ctx.user.id)


@router.get("/summary/daily", response_model=DailySummaryResponse)
def daily_summary(
    month: str = Query("", description="YYYY-MM"),
    ctx: AuthContext = Depends(current_user),
    db: Session = Depends(get_db),
):
    return aggregation.daily_summary(db, ctx.user.id, month)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(
    expense_id: str,
    ctx: AuthContext = Depends(current_user),
    db: Session = Depends(get_db),
):
    # anything that cannot be a row id simply does not exist
    if not (expense_id.isascii() and expense_id.isdigit()) or int(expense_id) > _MAX_ID:
        raise NotFoundError("Expense not found")
    crud.delete_expense(db, int(expense_id), ctx.user.id)
    return MessageResponse(message="Expense removed successfully")
