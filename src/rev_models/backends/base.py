"""
Backend contract.

A backend implements the four CRUD coroutines. Each receives the registry,
the target (an instance for create/update/remove, the model class for read),
the operation options and the result object to populate, and returns that
result.

Contract:
- Expected failures (an unrecognised filter field, a duplicate key) are added
  to ``result.errors`` and the call returns normally.
- Usage and system failures raise.
- On success, create sets ``result.result``; read sets ``result.results`` and
  ``result.meta = {"offset", "limit", "totalCount"}``; update and remove set
  ``result.meta = {"totalCount"}``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rev_models.models.model import Model
    from rev_models.models.registry import ModelRegistry
    from rev_models.operations.options import (
        CreateOptions,
        ReadOptions,
        RemoveOptions,
        UpdateOptions,
    )
    from rev_models.operations.result import ModelOperationResult


class Backend(ABC):
    """Base class for storage backends."""

    @abstractmethod
    async def create(
        self,
        registry: ModelRegistry,
        model: Model,
        options: CreateOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]: ...

    @abstractmethod
    async def read(
        self,
        registry: ModelRegistry,
        model: type[Model],
        options: ReadOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]: ...

    @abstractmethod
    async def update(
        self,
        registry: ModelRegistry,
        model: Model,
        options: UpdateOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]: ...

    @abstractmethod
    async def remove(
        self,
        registry: ModelRegistry,
        model: Model,
        options: RemoveOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]: ...


def get_update_fields(model: Model, declared: list[str], fields: list[str] | None) -> list[str]:
    """Fields an update writes: the given names, or every declared field set on the instance."""
    if fields is not None:
        return list(fields)
    return [name for name in declared if model.is_set(name)]
