"""
Operation result types.

Every operation call produces one ModelOperationResult. Backends populate it;
orchestration decides whether it is returned or raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from rev_models.errors import UsageError
from rev_models.models.model import Model
from rev_models.validation.result import ModelValidationResult

OperationName = Literal["create", "read", "update", "remove"]

T = TypeVar("T", bound=Model)


@dataclass(frozen=True)
class ModelOperation:
    """Descriptor of the operation a result belongs to.

    Attributes:
        name: Operation name
        where: Where clause the operation ran with, if any
    """

    name: OperationName
    where: dict[str, Any] | None = None


class ModelOperationResult(Generic[T]):
    """
    Outcome of one operation call.

    ``success`` is False as soon as an error has been added or the attached
    validation result is invalid.

    Example:
        result = await read(registry, Post, {"where": {"published": True}})
        for post in result.results:
            ...
        result.meta  # {"offset": 0, "limit": 20, "totalCount": 3}
    """

    def __init__(self, operation: ModelOperation) -> None:
        self.operation = operation
        self.errors: list[dict[str, Any]] = []
        self.validation: ModelValidationResult | None = None
        self.result: T | None = None
        self.results: list[T] | None = None
        self.meta: dict[str, Any] | None = None

    @property
    def success(self) -> bool:
        if self.errors:
            return False
        return self.validation is None or self.validation.valid

    def add_error(
        self,
        message: str | None,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Record an operation error.

        Args:
            message: Error message (required)
            code: Machine-readable error code
            data: Extra key/value data merged into the error

        Raises:
            UsageError: If message is missing or data is not a mapping
        """
        if not message:
            raise UsageError("A message must be specified for the operation error")
        if data is not None and not isinstance(data, Mapping):
            raise UsageError("You cannot add non-mapping data to an operation result")

        error: dict[str, Any] = {"message": message}
        if code is not None:
            error["code"] = code
        if data:
            error.update(data)
        self.errors.append(error)

    def __repr__(self) -> str:
        return (
            f"ModelOperationResult(operation={self.operation.name!r}, "
            f"success={self.success}, errors={self.errors!r})"
        )
