"""Typed success/failure results returned at the service boundary."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from bingo.errors import AppError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either ``data`` (success) or ``error`` (failure), never both."""

    success: bool
    data: T | None = None
    error: AppError | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: AppError) -> "OperationResult[T]":
        return cls(success=False, error=error)

    @property
    def message(self) -> str | None:
        return self.error.message if self.error is not None else None

    def unwrap(self) -> T | None:
        """Return ``data`` or raise the carried error."""

        if self.error is not None:
            raise self.error
        return self.data

    def to_dict(self, **payload: Any) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.message}
        return {"success": True, **payload}


def returns_result(func: Callable[..., T]) -> Callable[..., OperationResult[T]]:
    """Turn ``AppError`` raised by ``func`` into a failed ``OperationResult``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> OperationResult[T]:
        try:
            return OperationResult.ok(func(*args, **kwargs))
        except AppError as exc:
            logger.info("%s rejected: %s (%s)", func.__name__, exc.message, exc.code)
            return OperationResult.failed(exc)

    return wrapper
