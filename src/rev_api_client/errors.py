"""Errors raised by the API backend."""

from __future__ import annotations

from typing import Any

import httpx

from rev_models.errors import ModelError


class ApiResponseError(ModelError):
    """The API response did not satisfy the GraphQL envelope.

    The raw httpx.Response is kept in ``extra["response"]`` for diagnostics.
    """

    def __init__(self, message: str, response: httpx.Response, **extra: Any) -> None:
        super().__init__(message, extra={"response": response, **extra})

    @property
    def response(self) -> httpx.Response:
        return self.extra["response"]  # type: ignore[no-any-return]
