"""Pre-flight checks shared by the operation entry points."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from rev_models.errors import OperationError, UsageError
from rev_models.logging import log_with_context
from rev_models.models.meta import ModelMeta
from rev_models.models.model import Model
from rev_models.operations.options import UNSET
from rev_models.operations.result import ModelOperationResult, OperationName

logger = logging.getLogger(__name__)


def check_where(operation: OperationName, where: Any) -> None:
    if where is not None and where is not UNSET and not isinstance(where, Mapping):
        raise UsageError(f"{operation}() options.where must be a mapping")


def resolve_where(
    operation: OperationName,
    meta: ModelMeta,
    model: Model,
    where: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """
    Return the explicit where clause, or one derived from the primary key.

    Raises:
        UsageError: If no where clause was given and the model has no primary
            key, or the primary key value is not set
    """
    check_where(operation, where)
    if where is not None and where is not UNSET:
        return dict(where)
    pk = meta.primary_key
    if pk is None:
        raise UsageError(
            f"{operation}() must be called with a where clause for models with no primary key"
        )
    value = model.get(pk)
    if value is None:
        raise UsageError(
            f"{operation}() must be called with a where clause "
            f"when primary key field '{pk}' is undefined",
            extra={"field": pk},
        )
    return {pk: value}


def check_fields(meta: ModelMeta, fields: Any) -> list[str] | None:
    """
    Check an ``options.fields`` value.

    Raises:
        UsageError: If fields is not a list of declared field names
    """
    if fields is None:
        return None
    if isinstance(fields, str | bytes) or not isinstance(fields, Sequence):
        raise UsageError("options.fields must be a list of field names")
    for name in fields:
        if not isinstance(name, str):
            raise UsageError("options.fields must be a list of field names")
        if not meta.has_field(name):
            raise UsageError(f"Field '{name}' does not exist in {meta.name}")
    return list(fields)


def finish(meta: ModelMeta, result: ModelOperationResult[Any]) -> ModelOperationResult[Any]:
    """Return a successful result, or raise OperationError for backend-reported errors."""
    if result.errors:
        log_with_context(
            logger,
            logging.INFO,
            f"{result.operation.name}() rejected by backend",
            model=meta.name,
            backend=meta.backend,
            errors=[e.get("code") or e["message"] for e in result.errors],
        )
        raise OperationError(result)
    log_with_context(
        logger,
        logging.DEBUG,
        f"{result.operation.name}() succeeded",
        model=meta.name,
        backend=meta.backend,
        meta=result.meta,
    )
    return result
