"""
Application exception hierarchy.

Catalog and auth code raise these; ProductRepository turns them into
Result failures and ErrorHandler turns them into user-facing messages.
The cart and wishlist stores never raise.
"""
from typing import Any, Optional

from storefront.errors import ERROR_NO_DATA


class AppException(Exception):
    """Base for every exception the storefront raises on purpose."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


# ==================== NETWORK ====================

class NetworkException(AppException):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, original_error=original_error)
        self.status_code = status_code


class ServerException(NetworkException):
    """Catalog answered with a non-success HTTP status."""


class TimeoutException(NetworkException):
    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: Optional[float] = None,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, original_error=original_error)
        self.timeout_seconds = timeout_seconds


class ConnectionException(NetworkException):
    """Catalog host could not be reached."""


# ==================== AUTHENTICATION ====================

class AuthenticationException(AppException):
    pass


class InvalidCredentialsException(AuthenticationException):
    pass


class TokenExpiredException(AuthenticationException):
    pass


class SessionInvalidException(AuthenticationException):
    pass


# ==================== VALIDATION ====================

class ValidationException(AppException):
    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[dict[str, list[str]]] = None,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, original_error=original_error)
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        if not self.field_errors:
            return self.message
        details = "; ".join(f"{field}: {', '.join(errs)}" for field, errs in self.field_errors.items())
        return f"{self.message} - {details}"


# ==================== DATA ====================

class DataException(AppException):
    def __init__(
        self,
        message: str = ERROR_NO_DATA,
        resource_type: Optional[str] = None,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, original_error=original_error)
        self.resource_type = resource_type


class NotFoundException(DataException):
    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Any = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message, resource_type=resource_type, code=code)
        self.resource_id = resource_id


class ParseException(DataException):
    """Catalog payload did not match the expected shape."""
