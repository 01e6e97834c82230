# storefront/domain/exceptions.py
from typing import Any, List


class ApiError(Exception):
    """
    Base for every domain failure.
    Rendered by the handlers in storefront.main as {"message", "errors"?}.
    """

    status_code = 400

    def __init__(self, message: str, errors: List[Any] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class BadRequestError(ApiError):
    """Validation, not-found and business-rule violations."""

    status_code = 400


class UnauthorizedError(ApiError):
    """Missing, invalid or revoked credential."""

    status_code = 401

    def __init__(self, message: str = "User is not authorized", errors: List[Any] | None = None):
        super().__init__(message, errors)
