# expense_tracker/db/crud.py

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.core.errors import AuthorizationError, NotFoundError, StoreError
from .models import Expense, RevokedToken, User

logger = logging.getLogger(__name__)


@contextmanager
def _store(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("store failure while trying to %s", action)
        raise StoreError(f"Server error while trying to {action}") from e


# -------------------------
# Users
# -------------------------

def get_user(db: Session, user_id: int) -> Optional[User]:
    with _store(db, "load user"):
        return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    with _store(db, "load user"):
        return db.query(User).filter(User.email == email).first()


def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash, monthly_income=0)
    with _store(db, "register user"):
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def update_income(db: Session, user: User, value: Decimal) -> User:
    with _store(db, "update income"):
        user.monthly_income = value
        db.commit()
        db.refresh(user)
    return user


# -------------------------
# Expenses
# -------------------------

def _owned(db: Session, columns, owner_id: int, start: Optional[datetime], end: Optional[datetime]):
    q = db.query(*columns).filter(Expense.owner_id == owner_id)
    if start is not None:
        q = q.filter(Expense.date >= start)
    if end is not None:
        q = q.filter(Expense.date < end)
    return q


def find_expenses(
    db: Session,
    owner_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Expense]:
    """Owner's expenses, newest first, optionally limited to ``start <= date < end``."""
    with _store(db, "fetch expenses"):
        return (
            _owned(db, (Expense,), owner_id, start, end)
            .order_by(Expense.date.desc(), Expense.id.desc())
            .all()
        )


def iter_expense_amounts(
    db: Session,
    owner_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    batch_size: int = 500,
) -> Iterator[Tuple[datetime, Decimal]]:
    """
    Stream ``(date, amount)`` pairs for an owner in date order.
    Only the two columns are selected and rows are fetched in batches,
    so summaries over large histories never hold the whole table.
    """
    with _store(db, "aggregate expenses"):
        q = (
            _owned(db, (Expense.date, Expense.amount), owner_id, start, end)
            .order_by(Expense.date.asc())
            .yield_per(batch_size)
        )
        for row in q:
            yield row.date, row.amount


def create_expense(
    db: Session,
    owner_id: int,
    title: str,
    amount: Decimal,
    category: str,
    date: Optional[datetime] = None,
) -> Expense:
    expense = Expense(
        owner_id=owner_id,
        title=title,
        amount=amount,
        category=category,
        date=date or datetime.utcnow(),
    )
    with _store(db, "create expense"):
        db.add(expense)
        db.commit()
        db.refresh(expense)
    return expense


def delete_expense(db: Session, expense_id: int, owner_id: int) -> None:
    with _store(db, "delete expense"):
        expense = db.get(Expense, expense_id)

    if expense is None:
        raise NotFoundError("Expense not found")
    if expense.owner_id != owner_id:
        raise AuthorizationError("User not authorized")

    with _store(db, "delete expense"):
        db.delete(expense)
        db.commit()
    logger.info("expense %s deleted by user %s", expense_id, owner_id)


# -------------------------
# Tokens
# -------------------------

def revoke_token(db: Session, jti: str, expires_at: datetime) -> None:
    with _store(db, "log out"):
        # expired tokens are refused anyway, so their entries can go
        db.query(RevokedToken).filter(RevokedToken.expires_at < datetime.utcnow()).delete(synchronize_session=False)
        if db.get(RevokedToken, jti) is None:
            db.add(RevokedToken(jti=jti, expires_at=expires_at))
        db.commit()


def is_token_revoked(db: Session, jti: str) -> bool:
    with _store(db, "verify token"):
        return db.get(RevokedToken, jti) is not None
