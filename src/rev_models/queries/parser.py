"""
Where-clause parser.

Turns a where clause into a tree of query nodes that backends evaluate:

    {"id": {"_in": [2, 3]}, "published": True}
    -> ConjunctionNode("_and", [
           FieldNode("id", "_in", [2, 3]),
           FieldNode("published", "_eq", True),
       ])

Keys are field names or the conjunctions ``_and`` / ``_or`` (each holding a
list of where clauses). A field's value is either a literal (equality) or a
mapping holding exactly one operator.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from rev_models.errors import QueryError
from rev_models.models.meta import ModelMeta

CONJUNCTION_OPERATORS = frozenset({"_and", "_or"})
FIELD_OPERATORS = frozenset(
    {"_eq", "_ne", "_gt", "_gte", "_lt", "_lte", "_in", "_nin", "_like"}
)


# =============================================================================
# Query Nodes
# =============================================================================


@dataclass(frozen=True)
class FieldNode:
    """Test of one field value against one operator."""

    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class ConjunctionNode:
    """Logical combination of child nodes (``_and`` / ``_or``)."""

    operator: str
    children: list[QueryNode] = field(default_factory=list)


QueryNode = FieldNode | ConjunctionNode


@dataclass(frozen=True)
class OrderSpec:
    """One ``order_by`` entry."""

    field: str
    descending: bool = False


# =============================================================================
# Parsing
# =============================================================================


def parse_where(meta: ModelMeta, where: Mapping[str, Any] | None) -> ConjunctionNode:
    """
    Parse a where clause for a model.

    An absent or empty clause parses to an empty ``_and`` node, which matches
    every record.

    Raises:
        QueryError: On unrecognised fields or operators, or malformed values
    """
    if where is None:
        return ConjunctionNode("_and", [])
    if not isinstance(where, Mapping):
        raise QueryError(f"where clause must be a mapping, got {type(where).__name__}")
    return ConjunctionNode("_and", [_parse_key(meta, k, v) for k, v in where.items()])


def _parse_key(meta: ModelMeta, key: str, value: Any) -> QueryNode:
    if not isinstance(key, str):
        raise QueryError(f"{key!r} is not a recognised field of {meta.name}")
    if key in CONJUNCTION_OPERATORS:
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise QueryError(f"'{key}' must be a list of where clauses")
        children: list[QueryNode] = []
        for clause in value:
            if not isinstance(clause, Mapping):
                raise QueryError(f"'{key}' must be a list of where clauses")
            children.append(parse_where(meta, clause))
        return ConjunctionNode(key, children)

    if key.startswith("_"):
        raise QueryError(f"'{key}' is not a recognised conjunction operator")
    if not meta.has_field(key):
        raise QueryError(
            f"'{key}' is not a recognised field of {meta.name}",
            extra={"field": key},
        )

    if isinstance(value, Mapping):
        if len(value) != 1:
            raise QueryError(f"Value for field '{key}' must contain exactly one operator")
        operator, operand = next(iter(value.items()))
        if operator not in FIELD_OPERATORS:
            raise QueryError(f"'{operator}' is not a recognised field operator")
        _check_operand(key, operator, operand)
        return FieldNode(key, operator, operand)

    return FieldNode(key, "_eq", value)


def _check_operand(field_name: str, operator: str, operand: Any) -> None:
    if operator in ("_in", "_nin"):
        if isinstance(operand, str) or not isinstance(operand, Sequence):
            raise QueryError(f"'{operator}' operator for field '{field_name}' expects a list")
    elif operator == "_like":
        if not isinstance(operand, str):
            raise QueryError(f"'_like' operator for field '{field_name}' expects a string")
    elif operator in ("_gt", "_gte", "_lt", "_lte") and operand is None:
        raise QueryError(f"'{operator}' operator for field '{field_name}' expects a value")


def parse_order_by(meta: ModelMeta, order_by: Sequence[str] | None) -> list[OrderSpec]:
    """
    Parse ``order_by`` entries of the form ``"field"`` or ``"field desc"``.

    Raises:
        QueryError: On unknown fields or directions
    """
    specs: list[OrderSpec] = []
    for entry in order_by or []:
        parts = entry.split()
        if not parts or len(parts) > 2:
            raise QueryError(f"Invalid order_by entry '{entry}'")
        name = parts[0]
        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in ("asc", "desc"):
            raise QueryError(f"Invalid order_by direction '{parts[1]}' for field '{name}'")
        if not meta.has_field(name):
            raise QueryError(f"'{name}' is not a recognised field of {meta.name}")
        specs.append(OrderSpec(name, direction == "desc"))
    return specs
