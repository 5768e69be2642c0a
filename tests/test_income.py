from decimal import Decimal

import pytest

from expense_tracker.core.errors import ValidationError
from expense_tracker.db import crud
from expense_tracker.services import income


def test_new_user_income_defaults_to_zero(make_user):
    assert income.get_income(make_user()) == 0


def test_set_income_overwrites(db, make_user):
    user = make_user()
    assert income.set_income(db, user, 2500) == Decimal("2500")
    assert income.set_income(db, user, 1800.75) == Decimal("1800.75")
    assert crud.get_user(db, user.id).monthly_income == Decimal("1800.75")


def test_zero_income_is_allowed(db, make_user):
    assert income.set_income(db, make_user(), 0) == 0


def test_largest_income_the_column_holds(db, make_user):
    assert income.set_income(db, make_user(), Decimal("9999999999.99")) == Decimal("9999999999.99")


@pytest.mark.parametrize(
    "value",
    [-5, -0.01, "100", None, True, float("nan"), float("inf"), 0.004, Decimal("12.345"), 1e10, 1e300],
)
def test_set_income_rejects_invalid_and_leaves_store_alone(db, make_user, value):
    user = make_user()
    income.set_income(db, user, 300)

    with pytest.raises(ValidationError):
        income.set_income(db, user, value)

    db.expire_all()
    assert crud.get_user(db, user.id).monthly_income == Decimal("300")
