"""Fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from rev_models.backends.base import Backend
from rev_models.operations.result import ModelOperationResult


class MockBackend(Backend):
    """Backend that records calls and can add errors or raise."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.errors_to_add: list[str] = []
        self.error_to_raise: Exception | None = None
        self.results_to_return: list[Any] = []

    async def _handle(self, name: str, *args: Any) -> ModelOperationResult[Any]:
        self.calls.append((name, args))
        if self.error_to_raise is not None:
            raise self.error_to_raise
        result: ModelOperationResult[Any] = args[-1]
        for message in self.errors_to_add:
            result.add_error(message)
        if name == "read":
            result.results = list(self.results_to_return)
            options = args[2]
            result.meta = {
                "offset": options.offset,
                "limit": options.limit,
                "totalCount": len(self.results_to_return),
            }
        elif name == "create":
            result.result = args[1]
        else:
            result.meta = {"totalCount": 1}
        return result

    async def create(self, registry, model, options, result):  # type: ignore[no-untyped-def]
        return await self._handle("create", registry, model, options, result)

    async def read(self, registry, model, options, result):  # type: ignore[no-untyped-def]
        return await self._handle("read", registry, model, options, result)

    async def update(self, registry, model, options, result):  # type: ignore[no-untyped-def]
        return await self._handle("update", registry, model, options, result)

    async def remove(self, registry, model, options, result):  # type: ignore[no-untyped-def]
        return await self._handle("remove", registry, model, options, result)

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def mock_backend() -> MockBackend:
    return MockBackend()
