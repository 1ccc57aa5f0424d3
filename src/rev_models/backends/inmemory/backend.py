"""
In-memory backend.

Reference backend: records are plain dicts kept in insertion order in a list
per model name. Useful for tests, fixtures and prototyping.

Mutating calls are not serialised; callers that issue concurrent creates for
the same model must serialise them themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from rev_models.backends.base import Backend, get_update_fields
from rev_models.backends.inmemory.evaluator import matches, sort_records
from rev_models.errors import QueryError, UsageError
from rev_models.fields import FieldKind
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
from rev_models.queries.parser import ConjunctionNode, parse_order_by, parse_where

logger = logging.getLogger(__name__)


class InMemoryBackend(Backend):
    """Backend storing records in process memory."""

    def __init__(self) -> None:
        self._storage: dict[str, list[dict[str, Any]]] = {}
        self._sequences: dict[str, dict[str, int]] = {}

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_records(self, meta: ModelMeta) -> list[dict[str, Any]]:
        return self._storage.setdefault(meta.name, [])

    def _to_record(self, meta: ModelMeta, data: Mapping[str, Any]) -> dict[str, Any]:
        return {name: data[name] for name in meta.field_names if name in data}

    def _next_sequence(self, meta: ModelMeta, field_name: str) -> int:
        # Committed by _advance_sequences() once the record is stored
        return self._sequences.get(meta.name, {}).get(field_name, 0) + 1

    def _advance_sequences(self, meta: ModelMeta, record: Mapping[str, Any]) -> None:
        sequences = self._sequences.setdefault(meta.name, {})
        for field in meta.fields:
            value = record.get(field.name)
            if field.kind == FieldKind.AUTO_NUMBER and isinstance(value, int):
                sequences[field.name] = max(sequences.get(field.name, 0), value)

    def _parse_where(
        self,
        meta: ModelMeta,
        where: Mapping[str, Any] | None,
        result: ModelOperationResult[Any],
    ) -> ConjunctionNode | None:
        try:
            return parse_where(meta, where)
        except QueryError as e:
            result.add_error(e.message, "invalid_query", e.extra)
            return None

    def get_records(self, model: type[Model]) -> list[dict[str, Any]]:
        """Return a copy of the stored records for a model (by class name)."""
        return [dict(r) for r in self._storage.get(model.__name__, [])]

    # -------------------------------------------------------------------------
    # Fixture loading
    # -------------------------------------------------------------------------

    async def load(
        self,
        registry: ModelRegistry,
        model: type[Model],
        records: Iterable[Model | Mapping[str, Any]],
    ) -> None:
        """
        Bulk-seed storage for a model, bypassing validation.

        Args:
            registry: Registry holding the model's metadata
            model: Model class the records belong to
            records: Instances or mappings of field values
        """
        meta = registry.get_metadata(model)
        storage = self._get_records(meta)
        count = 0
        for item in records:
            data = item.to_dict() if isinstance(item, Model) else item
            if not isinstance(data, Mapping):
                raise UsageError(f"load() records must be {meta.name} instances or mappings")
            record = self._to_record(meta, data)
            storage.append(record)
            self._advance_sequences(meta, record)
            count += 1
        logger.debug("Loaded %d %s record(s)", count, meta.name)

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
        storage = self._get_records(meta)
        record = self._to_record(meta, model.to_dict())

        for field in meta.fields:
            if field.kind == FieldKind.AUTO_NUMBER and record.get(field.name) is None:
                record[field.name] = self._next_sequence(meta, field.name)

        pk = meta.primary_key
        if pk is not None and record.get(pk) is not None:
            value = record[pk]
            if any(existing.get(pk) == value for existing in storage):
                result.add_error(
                    f"Duplicate primary key: {meta.name} with {pk} {value!r} already exists",
                    "duplicate_primary_key",
                    {"field": pk, "value": value},
                )
                return result

        storage.append(record)
        self._advance_sequences(meta, record)
        result.result = meta.hydrate(record)
        return result

    async def read(
        self,
        registry: ModelRegistry,
        model: type[Model],
        options: ReadOptions,
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        meta = registry.get_metadata(model)
        query = self._parse_where(meta, options.where, result)
        if query is None:
            return result
        try:
            order = parse_order_by(meta, options.order_by)
        except QueryError as e:
            result.add_error(e.message, "invalid_order_by", e.extra)
            return result

        found = [r for r in self._get_records(meta) if matches(query, r)]
        if order:
            try:
                found = sort_records(found, order)
            except TypeError:
                names = ", ".join(spec.field for spec in order)
                result.add_error(
                    f"Cannot order {meta.name} records by {names}: values are not comparable",
                    "invalid_order_by",
                    {"fields": [spec.field for spec in order]},
                )
                return result
        page = found[options.offset : options.offset + options.limit]

        result.results = [meta.hydrate(r) for r in page]
        result.meta = {
            "offset": options.offset,
            "limit": options.limit,
            "totalCount": len(found),
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
        query = self._parse_where(meta, where, result)
        if query is None:
            return result

        names = get_update_fields(model, meta.field_names, options.fields)
        values = self._to_record(meta, {name: model.get(name) for name in names})
        storage = self._get_records(meta)
        matched = [record for record in storage if matches(query, record)]

        pk = meta.primary_key
        if matched and pk is not None and values.get(pk) is not None:
            value = values[pk]
            matched_ids = {id(record) for record in matched}
            taken = any(
                record.get(pk) == value for record in storage if id(record) not in matched_ids
            )
            if len(matched) > 1 or taken:
                result.add_error(
                    f"Duplicate primary key: {meta.name} update would leave more than "
                    f"one record with {pk} {value!r}",
                    "duplicate_primary_key",
                    {"field": pk, "value": value, "matched": len(matched)},
                )
                return result

        for record in matched:
            record.update(values)
        if matched:
            self._advance_sequences(meta, values)

        result.meta = {"totalCount": len(matched)}
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
        query = self._parse_where(meta, where, result)
        if query is None:
            return result

        storage = self._get_records(meta)
        kept = [r for r in storage if not matches(query, r)]
        removed = len(storage) - len(kept)
        storage[:] = kept

        result.meta = {"totalCount": removed}
        return result
