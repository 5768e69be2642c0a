import logging
import math
from decimal import Decimal

from sqlalchemy.orm import Session

from expense_tracker.core.errors import ValidationError
from expense_tracker.db import crud
from expense_tracker.db.models import User

logger = logging.getLogger(__name__)

# bounds of the Numeric(12, 2) column
_CENT = Decimal("0.01")
_MAX_INCOME = Decimal("1e10")


def get_income(user: User) -> Decimal:
    return user.monthly_income if user.monthly_income is not None else Decimal("0")


def set_income(db: Session, user: User, value) -> Decimal:
    """Overwrite the user's monthly income. No history is kept."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError("Invalid income amount")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError("Invalid income amount")
    if isinstance(value, Decimal) and not value.is_finite():
        raise ValidationError("Invalid income amount")
    if value < 0:
        raise ValidationError("Invalid income amount")

    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if amount >= _MAX_INCOME or amount != amount.quantize(_CENT):
        raise ValidationError("Invalid income amount")

    crud.update_income(db, user, amount)
    logger.info("monthly income updated for user %s", user.id)
    return get_income(user)
