class ExpenseTrackerError(Exception):
    """Base error. ``status_code`` is what the API answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ExpenseTrackerError):
    status_code = 400


class AuthenticationError(ExpenseTrackerError):
    status_code = 401


class AuthorizationError(ExpenseTrackerError):
    status_code = 403


class NotFoundError(ExpenseTrackerError):
    status_code = 404


class StoreError(ExpenseTrackerError):
    status_code = 500
