"""
GraphQL API backend.

Translates model operations into GraphQL requests sent over HTTP with an
injected ``httpx.AsyncClient``:

    async with httpx.AsyncClient(timeout=10) as client:
        manager.register_backend("api", ModelApiBackend("https://example.com/graphql", client))
        result = await manager.read(Post, {"where": {"published": True}})

Every response must satisfy the GraphQL envelope; violations raise
ApiResponseError carrying the raw response. Requests are never retried, and
timeouts are whatever the client is configured with.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx

from rev_api_client.config import ApiClientConfig, get_api_config
from rev_api_client.errors import ApiResponseError
from rev_api_client.query import (
    build_create_mutation,
    build_read_query,
    build_remove_mutation,
    build_update_mutation,
    hydrate_row,
    model_to_json,
    mutation_name,
    to_json_value,
)
from rev_models.backends.base import Backend
from rev_models.errors import UsageError
from rev_models.logging import log_with_context
from rev_models.models.meta import ModelMeta
from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.operations.options import (
    UNSET,
    CreateOptions,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
)
from rev_models.operations.result import ModelOperationResult
from rev_models.validation.result import ModelValidationResult

logger = logging.getLogger(__name__)


class ModelApiBackend(Backend):
    """Backend that reads and writes models through a GraphQL API."""

    def __init__(
        self,
        url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        *,
        config: ApiClientConfig | None = None,
    ) -> None:
        """
        Initialize the backend.

        Args:
            url: GraphQL endpoint (defaults to the configured REV_API_URL)
            http_client: Client used for requests; a default client is built
                from the configuration and owned by the backend when omitted
            config: Client configuration (defaults to get_api_config())
        """
        self.config = config or get_api_config()
        self.url = url or self.config.url
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=self.config.headers,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if the backend created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ModelApiBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _execute(
        self, query: str, variables: dict[str, Any]
    ) -> tuple[httpx.Response, dict[str, Any]]:
        """
        POST a GraphQL document and check the outer envelope.

        Returns:
            The raw response and its decoded JSON body

        Raises:
            ApiResponseError: If the body is missing or GraphQL errors were returned
            httpx.HTTPError: On transport failures (propagated unchanged)
        """
        start = time.monotonic()
        response = await self.client.post(
            self.url, json={"query": query, "variables": variables}
        )
        latency_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "POST %s -> %s (%.1fms)", self.url, response.status_code, latency_ms
        )

        body = _decode_body(response)
        if body is None:
            self._log_failure("no data", response)
            raise ApiResponseError("Received no data from the API", response)

        errors = body.get("errors")
        if errors:
            self._log_failure("graphql errors", response, errors=errors)
            raise ApiResponseError("GraphQL errors were returned", response, errors=errors)

        return response, body

    def _log_failure(self, reason: str, response: httpx.Response, **context: Any) -> None:
        log_with_context(
            logger,
            logging.WARNING,
            f"GraphQL request failed: {reason}",
            url=self.url,
            status_code=response.status_code,
            **context,
        )

    async def _mutate(
        self,
        meta: ModelMeta,
        operation: str,
        query: str,
        variables: dict[str, Any],
        result: ModelOperationResult[Any],
    ) -> Mapping[str, Any]:
        """Run a mutation and copy its operation result payload onto ``result``."""
        response, body = await self._execute(query, variables)
        data = body.get("data")
        payload = data.get(mutation_name(meta, operation)) if isinstance(data, Mapping) else None
        if not isinstance(payload, Mapping):
            self._log_failure("missing operation result", response)
            raise ApiResponseError(
                "GraphQL response did not contain the expected operation result", response
            )

        for error in payload.get("errors") or []:
            extra = {k: v for k, v in error.items() if k not in ("message", "code")}
            result.add_error(
                error.get("message") or "Unknown API error", error.get("code"), extra
            )
        validation = payload.get("validation")
        if isinstance(validation, Mapping):
            result.validation = ModelValidationResult.from_dict(validation)
        if not result.errors and (payload.get("success") is False or not result.success):
            result.add_error(
                f"The API reported an unsuccessful {operation} operation",
                "api_operation_failed",
            )
        return payload

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def create(
        self,
        registry: ModelRegistry,
        model: Model,
        options: CreateOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        meta = registry.get_metadata(model)
        payload = await self._mutate(
            meta,
            "create",
            build_create_mutation(meta),
            {"model": model_to_json(meta, model)},
            result,
        )
        if result.success:
            created = payload.get("result")
            if isinstance(created, Mapping):
                result.result = hydrate_row(meta, created)
            else:
                result.result = meta.hydrate(model.to_dict())
        return result

    async def read(
        self,
        registry: ModelRegistry,
        model: type[Model],
        options: ReadOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        meta = registry.get_metadata(model)
        variables: dict[str, Any] = {
            "where": to_json_value(options.where or {}),
            "offset": options.offset,
            "limit": options.limit,
        }
        if options.order_by:
            variables["orderBy"] = list(options.order_by)

        response, body = await self._execute(build_read_query(meta), variables)

        data = body.get("data")
        model_data = data.get(meta.name) if isinstance(data, Mapping) else None
        rows = model_data.get("results") if isinstance(model_data, Mapping) else None
        if not isinstance(rows, list):
            self._log_failure("missing model results", response, model=meta.name)
            raise ApiResponseError(
                "GraphQL response did not contain the expected model results", response
            )

        result.results = [hydrate_row(meta, row) for row in rows]
        result.meta = {
            "offset": model_data.get("offset", options.offset),
            "limit": model_data.get("limit", options.limit),
            "totalCount": model_data.get("totalCount", len(rows)),
        }
        return result

    async def update(
        self,
        registry: ModelRegistry,
        model: Model,
        options: UpdateOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        meta = registry.get_metadata(model)
        where = {} if options.where is UNSET else options.where
        if not isinstance(where, Mapping):
            raise UsageError("update() requires the 'where' option")
        variables: dict[str, Any] = {
            "model": model_to_json(meta, model),
            "where": to_json_value(where),
        }
        if options.fields is not None:
            variables["fields"] = list(options.fields)
        payload = await self._mutate(
            meta, "update", build_update_mutation(meta), variables, result
        )
        if result.success:
            result.meta = {"totalCount": _total_count(payload)}
        return result

    async def remove(
        self,
        registry: ModelRegistry,
        model: Model,
        options: RemoveOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        meta = registry.get_metadata(model)
        where = {} if options.where is UNSET else options.where
        if not isinstance(where, Mapping):
            raise UsageError("remove() requires the 'where' option")
        payload = await self._mutate(
            meta,
            "remove",
            build_remove_mutation(meta),
            {"where": to_json_value(where)},
            result,
        )
        if result.success:
            result.meta = {"totalCount": _total_count(payload)}
        return result


def _decode_body(response: httpx.Response) -> dict[str, Any] | None:
    """Decode the JSON body; None when it is empty, null, not JSON or not an object."""
    if not response.content:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _total_count(payload: Mapping[str, Any]) -> int:
    meta = payload.get("meta")
    if isinstance(meta, Mapping) and isinstance(meta.get("totalCount"), int):
        return int(meta["totalCount"])
    return 0
