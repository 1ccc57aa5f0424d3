"""
Error types for model registration, operations and backends.

All errors raised by this package derive from ModelError, which carries a
fixed ``extra`` mapping for diagnostic data (e.g. the raw HTTP response of a
failed API call). Errors that travel with an operation result expose it as
``.result``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rev_models.operations.result import ModelOperationResult


class ModelError(Exception):
    """Base exception for rev-models errors."""

    def __init__(self, message: str, *, extra: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra: dict[str, Any] = dict(extra or {})


class RegistrationError(ModelError):
    """Unknown model or backend, or a duplicate / malformed registration."""

    pass


class UsageError(ModelError):
    """An operation or helper was called with invalid arguments."""

    pass


class QueryError(ModelError):
    """A where clause or ordering could not be parsed."""

    pass


class ValidationError(ModelError):
    """Field validation failed before the backend was called.

    The attached result holds the failed ModelValidationResult.
    """

    def __init__(self, result: ModelOperationResult[Any]) -> None:
        super().__init__("ValidationError", extra={"result": result})

    @property
    def result(self) -> ModelOperationResult[Any]:
        return self.extra["result"]  # type: ignore[no-any-return]


class OperationError(ModelError):
    """The backend reported errors on the operation result."""

    def __init__(self, result: ModelOperationResult[Any]) -> None:
        messages = "; ".join(str(e.get("message")) for e in result.errors)
        super().__init__(
            f"{result.operation.name}() failed: {messages}",
            extra={"result": result},
        )

    @property
    def result(self) -> ModelOperationResult[Any]:
        return self.extra["result"]  # type: ignore[no-any-return]


__all__ = [
    "ModelError",
    "OperationError",
    "QueryError",
    "RegistrationError",
    "UsageError",
    "ValidationError",
]
