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


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class InvalidGameError(AppError):
    """Referenced lottery does not exist."""

    def __init__(self, message: str = "Lottery not found", details: Any | None = None) -> None:
        super().__init__(code="invalid_game", message=message, status_code=404, details=details)


class InvalidCountError(AppError):
    """Requested amount of numbers is outside the legal bounds."""

    def __init__(self, message: str = "Invalid count", details: Any | None = None) -> None:
        super().__init__(code="invalid_count", message=message, status_code=400, details=details)


class RateLimitError(AppError):
    """Too many requests from one client."""

    def __init__(self, message: str = "Rate limit exceeded", details: Any | None = None) -> None:
        super().__init__(code="rate_limited", message=message, status_code=429, details=details)
