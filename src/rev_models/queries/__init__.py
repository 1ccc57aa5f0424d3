"""Where-clause and ordering parsing."""

from rev_models.queries.parser import (
    CONJUNCTION_OPERATORS,
    FIELD_OPERATORS,
    ConjunctionNode,
    FieldNode,
    OrderSpec,
    QueryNode,
    parse_order_by,
    parse_where,
)

__all__ = [
    "CONJUNCTION_OPERATORS",
    "FIELD_OPERATORS",
    "ConjunctionNode",
    "FieldNode",
    "OrderSpec",
    "QueryNode",
    "parse_order_by",
    "parse_where",
]
