"""
In-memory query evaluation.

Evaluates parsed query nodes against plain record dicts, and sorts records
for ``order_by``.
"""

from __future__ import annotations

import re
from functools import cache
from typing import Any

from rev_models.queries.parser import ConjunctionNode, FieldNode, OrderSpec, QueryNode


def matches(node: QueryNode, record: dict[str, Any]) -> bool:
    """
    Test a record against a query node.

    An ``_and`` node with no children matches every record; an ``_or`` node
    with no children matches none.
    """
    if isinstance(node, ConjunctionNode):
        if node.operator == "_and":
            return all(matches(child, record) for child in node.children)
        return any(matches(child, record) for child in node.children)
    return _compare(node, record.get(node.field))


def _compare(node: FieldNode, value: Any) -> bool:
    operator = node.operator
    operand = node.value

    if operator == "_eq":
        return bool(value == operand)
    if operator == "_ne":
        return bool(value != operand)
    if operator == "_in":
        return value in operand
    if operator == "_nin":
        return value not in operand
    if operator == "_like":
        return isinstance(value, str) and _like_pattern(operand).match(value) is not None

    # Ordering comparisons never match missing values
    if value is None:
        return False
    try:
        if operator == "_gt":
            return bool(value > operand)
        if operator == "_gte":
            return bool(value >= operand)
        if operator == "_lt":
            return bool(value < operand)
        if operator == "_lte":
            return bool(value <= operand)
    except TypeError:
        return False
    raise ValueError(f"Unsupported operator '{operator}'")


@cache
def _like_pattern(pattern: str) -> re.Pattern[str]:
    """Convert a SQL LIKE pattern (``%`` and ``_`` wildcards) to a regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE | re.DOTALL)


def sort_records(records: list[dict[str, Any]], order: list[OrderSpec]) -> list[dict[str, Any]]:
    """Stable multi-key sort; missing values sort first in ascending order."""
    ordered = list(records)
    for spec in reversed(order):
        ordered.sort(
            key=lambda r, name=spec.field: (r.get(name) is not None, r.get(name)),  # type: ignore[misc]
            reverse=spec.descending,
        )
    return ordered
