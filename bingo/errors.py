"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint, sold out game)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class InvalidStateError(AppError):
    """Operation attempted from the wrong game lifecycle state."""

    def __init__(self, message: str = "Invalid game state", details: Any | None = None) -> None:
        super().__init__(code="invalid_state", message=message, status_code=409, details=details)


class PrecompletionError(AppError):
    """A precondition of the operation is not met yet (e.g., no cards sold)."""

    def __init__(self, message: str = "Precondition not met", details: Any | None = None) -> None:
        super().__init__(code="precondition_failed", message=message, status_code=412, details=details)


class ExhaustedError(AppError):
    """No numbers remain to be drawn."""

    def __init__(self, message: str = "All numbers have been called", details: Any | None = None) -> None:
        super().__init__(code="exhausted", message=message, status_code=409, details=details)


class InsufficientCreditsError(AppError):
    """Profile balance does not cover the requested debit."""

    def __init__(self, message: str = "Insufficient credits", details: Any | None = None) -> None:
        super().__init__(code="insufficient_credits", message=message, status_code=402, details=details)


class StorageError(AppError):
    """Persistence collaborator failed."""

    def __init__(self, message: str = "Storage error", details: Any | None = None) -> None:
        super().__init__(code="storage_error", message=message, status_code=500, details=details)
