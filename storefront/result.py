"""
Result type for catalog operations.

A Result carries either data or an AppException, never both. Repository
methods return Results instead of raising so callers decide how to show
failures:

    result = await repo.get_products()
    message = result.fold(
        on_success=lambda products: f"{len(products)} products",
        on_failure=lambda error: error.message,
    )
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, TypeVar

from storefront.errors import ERROR_NO_DATA
from storefront.exceptions import AppException, ValidationException

T = TypeVar("T")
R = TypeVar("R")


class Result(Generic[T]):
    __slots__ = ("_data", "_error", "_is_success")

    def __init__(self, data: Optional[T], error: Optional[AppException], is_success: bool) -> None:
        self._data = data
        self._error = error
        self._is_success = is_success

    # ==================== CONSTRUCTORS ====================

    @classmethod
    def success(cls, data: T) -> "Result[T]":
        return cls(data, None, True)

    @classmethod
    def failure(cls, error: AppException) -> "Result[T]":
        return cls(None, error, False)

    @classmethod
    def from_exception(cls, exc: BaseException, message: Optional[str] = None) -> "Result[T]":
        """Wrap any exception; non-AppExceptions become a generic AppException."""
        if isinstance(exc, AppException):
            return cls.failure(exc)
        return cls.failure(AppException(message or str(exc), original_error=exc))

    @classmethod
    def wrap(cls, operation: Callable[[], T]) -> "Result[T]":
        try:
            return cls.success(operation())
        except Exception as e:
            return cls.from_exception(e)

    @classmethod
    async def wrap_async(cls, operation: Callable[[], Awaitable[T]]) -> "Result[T]":
        try:
            return cls.success(await operation())
        except Exception as e:
            return cls.from_exception(e)

    @staticmethod
    def combine(results: Iterable["Result[Any]"]) -> "Result[list[Any]]":
        """First failure wins; otherwise a list of every success value."""
        data = []
        for result in results:
            if result.is_failure:
                return Result.failure(result._error)
            data.append(result._data)
        return Result.success(data)

    # ==================== ACCESSORS ====================

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def data_or_none(self) -> Optional[T]:
        return self._data if self._is_success else None

    @property
    def error_or_none(self) -> Optional[AppException]:
        return None if self._is_success else self._error

    @property
    def error_message_or_none(self) -> Optional[str]:
        error = self.error_or_none
        return error.message if error else None

    def data_or_raise(self) -> T:
        if self._is_success:
            return self._data
        raise self._error or AppException(ERROR_NO_DATA)

    def get_or_else(self, default: T) -> T:
        return self._data if self._is_success else default

    # ==================== COMBINATORS ====================

    def map(self, transform: Callable[[T], R]) -> "Result[R]":
        if self.is_failure:
            return Result.failure(self._error)
        try:
            return Result.success(transform(self._data))
        except Exception as e:
            return Result.from_exception(e)

    def flat_map(self, transform: Callable[[T], "Result[R]"]) -> "Result[R]":
        if self.is_failure:
            return Result.failure(self._error)
        try:
            return transform(self._data)
        except Exception as e:
            return Result.from_exception(e)

    def filter(self, predicate: Callable[[T], bool], error_message: str = "Filter condition not met") -> "Result[T]":
        if self.is_failure or predicate(self._data):
            return self
        return Result.failure(ValidationException(error_message))

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[AppException], R]) -> R:
        if self._is_success:
            return on_success(self._data)
        return on_failure(self._error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (
            self._is_success == other._is_success
            and self._data == other._data
            and self._error is other._error
        )

    def __hash__(self) -> int:
        return hash((self._is_success, id(self._error)))

    def __repr__(self) -> str:
        if self._is_success:
            return f"Result.success({self._data!r})"
        return f"Result.failure({self._error!r})"
