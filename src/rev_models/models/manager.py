"""
Model manager.

A ModelRegistry with the four operations bound to it:

    manager = ModelManager()
    manager.register_backend("default", InMemoryBackend())
    manager.register(Post)

    created = await manager.create(Post(title="Hello"))
    page = await manager.read(Post, {"where": {"title": {"_like": "hel%"}}})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations import (
    CreateOptions,
    ModelOperationResult,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
    create,
    read,
    remove,
    update,
)
from rev_models.validation.result import ModelValidationResult
from rev_models.validation.validate import validate_model


class ModelManager(ModelRegistry):
    """Registry exposing create / read / update / remove as methods."""

    async def create(
        self, model: Model, options: CreateOptions | Mapping[str, Any] | None = None
    ) -> ModelOperationResult[Any]:
        return await create(self, model, options)

    async def read(
        self, model: type[Model], options: ReadOptions | Mapping[str, Any] | None = None
    ) -> ModelOperationResult[Any]:
        return await read(self, model, options)

    async def update(
        self, model: Model, options: UpdateOptions | Mapping[str, Any] | None = None
    ) -> ModelOperationResult[Any]:
        return await update(self, model, options)

    async def remove(
        self, model: Model, options: RemoveOptions | Mapping[str, Any] | None = None
    ) -> ModelOperationResult[Any]:
        return await remove(self, model, options)

    async def validate(
        self, model: Model, fields: list[str] | None = None
    ) -> ModelValidationResult:
        """Validate an instance without running an operation."""
        return await validate_model(self, model, "create", fields)
