"""
GraphQL document building and value conversion.

Arguments are always sent as variables, so where clauses and model values
never need escaping inside the document:

    query ($where: JSON, $offset: Int, $limit: Int, $orderBy: [String!]) {
      Post(where: $where, offset: $offset, limit: $limit, orderBy: $orderBy) {
        results { id title body }
        totalCount
      }
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from rev_models.fields import FieldKind, FieldSpec
from rev_models.models.meta import ModelMeta
from rev_models.models.model import Model


def build_selection(meta: ModelMeta) -> str:
    return " ".join(meta.field_names)


def build_read_query(meta: ModelMeta) -> str:
    return (
        "query ($where: JSON, $offset: Int, $limit: Int, $orderBy: [String!]) {\n"
        f"  {meta.name}(where: $where, offset: $offset, limit: $limit, orderBy: $orderBy) {{\n"
        f"    results {{ {build_selection(meta)} }}\n"
        "    totalCount\n"
        "  }\n"
        "}"
    )


def mutation_name(meta: ModelMeta, operation: str) -> str:
    return f"{meta.name}_{operation}"


def build_create_mutation(meta: ModelMeta) -> str:
    return f"mutation ($model: JSON!) {{\n  {mutation_name(meta, 'create')}(model: $model)\n}}"


def build_update_mutation(meta: ModelMeta) -> str:
    return (
        "mutation ($model: JSON!, $where: JSON, $fields: [String!]) {\n"
        f"  {mutation_name(meta, 'update')}(model: $model, where: $where, fields: $fields)\n"
        "}"
    )


def build_remove_mutation(meta: ModelMeta) -> str:
    return f"mutation ($where: JSON) {{\n  {mutation_name(meta, 'remove')}(where: $where)\n}}"


# =============================================================================
# Value Conversion
# =============================================================================


def to_json_value(value: Any) -> Any:
    """Convert a value (recursively) into JSON-serialisable form."""
    if isinstance(value, date | datetime | time):
        return value.isoformat()
    if isinstance(value, Model):
        return to_json_value(value.to_dict())
    if isinstance(value, Mapping):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set | frozenset):
        return [to_json_value(v) for v in value]
    return value


def model_to_json(meta: ModelMeta, model: Model) -> dict[str, Any]:
    """Declared fields set on the instance, as JSON values."""
    return {
        name: to_json_value(model.get(name)) for name in meta.field_names if model.is_set(name)
    }


def from_json_value(field: FieldSpec, value: Any) -> Any:
    """Parse ISO strings for temporal fields; other values pass through."""
    if not isinstance(value, str):
        return value
    try:
        if field.kind == FieldKind.DATE:
            return date.fromisoformat(value)
        if field.kind == FieldKind.TIME:
            return time.fromisoformat(value)
        if field.kind == FieldKind.DATETIME:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return value


def hydrate_row(meta: ModelMeta, row: Mapping[str, Any]) -> Model:
    values = {}
    for field in meta.fields:
        if field.name in row:
            values[field.name] = from_json_value(field, row[field.name])
    return meta.model(values)
