"""
HTTP client for the expense tracker API.

There is no global token: ``login``/``register`` hand back an ``ApiSession``
and every protected call takes one explicitly. ``logout`` revokes the token
on the server and marks the session closed.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import requests

from expense_tracker.schemas.expense import ExpenseOut
from expense_tracker.schemas.expense_summary import DailySummaryResponse, MonthlyBucket
from expense_tracker.schemas.user import BalanceResponse, IncomeResponse
from expense_tracker.services import balance as balance_calc

EXPENSE_API_URL = os.getenv("EXPENSE_API_URL", "http://localhost:8000")


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class ApiSession:
    token: str
    user_id: int
    name: str
    email: str
    active: bool = True

    def headers(self) -> dict:
        if not self.active:
            raise ApiError(401, "Session has been logged out")
        return {"Authorization": f"Bearer {self.token}"}


class ExpenseClient:
    def __init__(self, base_url: str = EXPENSE_API_URL, http=None, timeout: float = 30):
        # ``http`` is anything with a requests-style ``request`` method
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, session: Optional[ApiSession] = None, **kwargs):
        headers = session.headers() if session is not None else {}
        kwargs.setdefault("timeout", self.timeout)
        r = self.http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        if r.status_code >= 400:
            try:
                message = r.json().get("message", r.text)
            except ValueError:
                message = r.text
            raise ApiError(r.status_code, message)
        return r.json()

    # ---------------- auth ----------------

    def _session(self, data: dict) -> ApiSession:
        return ApiSession(token=data["token"], user_id=data["id"], name=data["name"], email=data["email"])

    def register(self, name: str, email: str, password: str) -> ApiSession:
        data = self._request("POST", "/api/auth/register", json={"name": name, "email": email, "password": password})
        return self._session(data)

    def login(self, email: str, password: str) -> ApiSession:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._session(data)

    def logout(self, session: ApiSession) -> None:
        self._request("POST", "/api/auth/logout", session)
        session.active = False

    # ---------------- expenses ----------------

    def add_expense(
        self,
        session: ApiSession,
        title: str,
        amount: float,
        category: str,
        date: Optional[str] = None,
    ) -> ExpenseOut:
        body = {"title": title, "amount": amount, "category": category}
        if date:
            body["date"] = date
        return ExpenseOut.model_validate(self._request("POST", "/api/expenses", session, json=body))

    def list_expenses(self, session: ApiSession) -> List[ExpenseOut]:
        return [ExpenseOut.model_validate(e) for e in self._request("GET", "/api/expenses", session)]

    def delete_expense(self, session: ApiSession, expense_id: int) -> None:
        self._request("DELETE", f"/api/expenses/{expense_id}", session)

    def monthly_summary(self, session: ApiSession) -> List[MonthlyBucket]:
        return [MonthlyBucket.model_validate(b) for b in self._request("GET", "/api/expenses/summary/monthly", session)]

    def daily_summary(self, session: ApiSession, month: str) -> DailySummaryResponse:
        data = self._request("GET", "/api/expenses/summary/daily", session, params={"month": month})
        return DailySummaryResponse.model_validate(data)

    # ---------------- income ----------------

    def get_income(self, session: ApiSession) -> Decimal:
        data = self._request("GET", "/api/user/income", session)
        return IncomeResponse.model_validate(data).monthly_income

    def set_income(self, session: ApiSession, income: float) -> Decimal:
        data = self._request("POST", "/api/user/income", session, json={"income": income})
        return IncomeResponse.model_validate(data).monthly_income

    def balance(self, session: ApiSession, now: Optional[datetime] = None) -> BalanceResponse:
        """Available balance worked out locally from the expense list and income."""
        now = now or datetime.utcnow()
        expenses = self.list_expenses(session)
        monthly_income = self.get_income(session)

        spent = balance_calc.current_month_total(expenses, now)
        available = balance_calc.available_balance(monthly_income, spent)
        return BalanceResponse(
            month=f"{now.year:04d}-{now.month:02d}",
            monthly_income=monthly_income,
            current_month_total=spent,
            available_balance=available,
            state=balance_calc.balance_state(available),
        )
