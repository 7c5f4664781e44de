"""
Error Handler

Turns exceptions into ErrorInfo: a user-facing message, recovery
suggestions and a handling strategy for the presentation layer.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from storefront.exceptions import (
    AppException,
    AuthenticationException,
    ConnectionException,
    DataException,
    InvalidCredentialsException,
    NetworkException,
    NotFoundException,
    ServerException,
    SessionInvalidException,
    TimeoutException,
    TokenExpiredException,
    ValidationException,
)
from storefront.logging import get_logger

logger = get_logger(__name__)


class ErrorType(str, Enum):
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    DATA = "data"
    UNKNOWN = "unknown"


class ErrorHandlingStrategy(str, Enum):
    SHOW_USER_MESSAGE = "show_user_message"
    SHOW_RETRY_DIALOG = "show_retry_dialog"
    SHOW_LOGIN_FORM = "show_login_form"
    LOG_ONLY = "log_only"


@dataclass
class ErrorInfo:
    """Structured error for display and logging."""
    title: str
    message: str
    user_message: str
    type: ErrorType
    code: Optional[str] = None
    suggestions: list[str] = field(default_factory=list)
    is_recoverable: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_retryable(self) -> bool:
        return self.type == ErrorType.NETWORK

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "message": self.user_message,
            "type": self.type.value,
            "code": self.code,
            "suggestions": self.suggestions,
        }


class ErrorHandler:
    """Stateless mapper from exceptions to ErrorInfo."""

    def handle_error(self, exc: BaseException, context: Optional[dict[str, Any]] = None) -> ErrorInfo:
        info = self._create_error_info(exc, context or {})
        logger.warning("%s [%s]: %s", info.title, info.code, info.message)
        return info

    def get_handling_strategy(self, info: ErrorInfo) -> ErrorHandlingStrategy:
        if info.type == ErrorType.NETWORK:
            return ErrorHandlingStrategy.SHOW_RETRY_DIALOG
        if info.type == ErrorType.AUTHENTICATION:
            if info.code in ("TOKEN_EXPIRED", "SESSION_INVALID"):
                return ErrorHandlingStrategy.SHOW_LOGIN_FORM
            return ErrorHandlingStrategy.SHOW_USER_MESSAGE
        if info.type == ErrorType.DATA:
            if info.code == "NOT_FOUND":
                return ErrorHandlingStrategy.SHOW_USER_MESSAGE
            return ErrorHandlingStrategy.SHOW_RETRY_DIALOG
        return ErrorHandlingStrategy.SHOW_USER_MESSAGE

    # ==================== MAPPING ====================

    def _create_error_info(self, exc: BaseException, context: dict[str, Any]) -> ErrorInfo:
        if isinstance(exc, NetworkException):
            return ErrorInfo(
                title="Network Error",
                message=exc.message,
                user_message=self._network_user_message(exc),
                type=ErrorType.NETWORK,
                code=exc.code or self._network_code(exc),
                suggestions=[
                    "Check your internet connection",
                    "Try again in a moment",
                    "Contact support if the problem persists",
                ],
                metadata={"status_code": exc.status_code, **context},
            )

        if isinstance(exc, AuthenticationException):
            return ErrorInfo(
                title="Authentication Error",
                message=exc.message,
                user_message=self._auth_user_message(exc),
                type=ErrorType.AUTHENTICATION,
                code=exc.code or self._auth_code(exc),
                is_recoverable=isinstance(exc, TokenExpiredException),
                suggestions=(
                    ["Check your username and password"]
                    if isinstance(exc, InvalidCredentialsException)
                    else ["Please log in again to continue"]
                ),
                metadata=context,
            )

        if isinstance(exc, ValidationException):
            return ErrorInfo(
                title="Validation Error",
                message=str(exc),
                user_message="Please check your input and try again.",
                type=ErrorType.VALIDATION,
                code=exc.code or "VALIDATION_ERROR",
                suggestions=["Check all required fields", "Ensure correct format"],
                metadata={"errors": exc.field_errors, **context},
            )

        if isinstance(exc, DataException):
            not_found = isinstance(exc, NotFoundException)
            resource = exc.resource_type or "item"
            return ErrorInfo(
                title="Data Error",
                message=exc.message,
                user_message=(
                    f"The requested {resource} was not found."
                    if not_found
                    else "A data error occurred. Please try again."
                ),
                type=ErrorType.DATA,
                code=exc.code or ("NOT_FOUND" if not_found else "DATA_ERROR"),
                suggestions=["Refresh the page"] if not_found else ["Try again"],
                metadata=context,
            )

        if isinstance(exc, AppException):
            return ErrorInfo(
                title="Application Error",
                message=exc.message,
                user_message="An application error occurred. Please try again.",
                type=ErrorType.UNKNOWN,
                code=exc.code or "APP_ERROR",
                metadata=context,
            )

        return ErrorInfo(
            title="Unexpected Error",
            message=str(exc),
            user_message="An unexpected error occurred. Please try again or contact support.",
            type=ErrorType.UNKNOWN,
            code="UNKNOWN_ERROR",
            suggestions=["Try again", "Contact support if the problem persists"],
            metadata=context,
        )

    @staticmethod
    def _network_code(exc: NetworkException) -> str:
        if isinstance(exc, TimeoutException):
            return "TIMEOUT_ERROR"
        if isinstance(exc, ConnectionException):
            return "CONNECTION_ERROR"
        if isinstance(exc, ServerException):
            return "SERVER_ERROR"
        return "NETWORK_ERROR"

    @staticmethod
    def _network_user_message(exc: NetworkException) -> str:
        if isinstance(exc, ServerException) and exc.status_code:
            if exc.status_code >= 500:
                return "Server is temporarily unavailable. Please try again later."
            if exc.status_code == 404:
                return "The requested resource was not found."
            if exc.status_code in (401, 403):
                return "You don't have permission to access this resource."
        if isinstance(exc, ConnectionException):
            return "Unable to connect to the server. Please check your internet connection."
        if isinstance(exc, TimeoutException):
            return "The request took too long to complete. Please try again."
        return "A network error occurred. Please try again."

    @staticmethod
    def _auth_code(exc: AuthenticationException) -> str:
        if isinstance(exc, InvalidCredentialsException):
            return "INVALID_CREDENTIALS"
        if isinstance(exc, TokenExpiredException):
            return "TOKEN_EXPIRED"
        if isinstance(exc, SessionInvalidException):
            return "SESSION_INVALID"
        return "AUTH_ERROR"

    @staticmethod
    def _auth_user_message(exc: AuthenticationException) -> str:
        if isinstance(exc, InvalidCredentialsException):
            return "Invalid username or password. Please try again."
        if isinstance(exc, TokenExpiredException):
            return "Your session has expired. Please log in again."
        if isinstance(exc, SessionInvalidException):
            return "Your session is invalid. Please log in again."
        return "Authentication failed. Please log in again."
