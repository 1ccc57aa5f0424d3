"""
Operation options.

Options may be passed as these dataclasses or as plain dicts with the same
keys; coerce_options() normalises both. An update or remove ``where`` left
at UNSET was not given, which is distinct from an explicit None.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from rev_models.config import get_config
from rev_models.errors import UsageError


class _Unset:
    """Marker for a ``where`` option that was not given."""

    def __repr__(self) -> str:
        return "UNSET"


# Distinct from an explicit None where clause
UNSET: Any = _Unset()


def _default_read_limit() -> int:
    return get_config().read_limit


@dataclass
class CreateOptions:
    """Options for create().

    Attributes:
        validate: Run field validation before calling the backend
    """

    validate: bool = True


@dataclass
class ReadOptions:
    """Options for read().

    Attributes:
        where: Filter (None or {} matches everything)
        offset: Number of matching records to skip
        limit: Maximum number of records to return
        order_by: Sort entries, e.g. ["title", "created desc"]
    """

    where: dict[str, Any] | None = None
    offset: int = 0
    limit: int = field(default_factory=_default_read_limit)
    order_by: list[str] | None = None


@dataclass
class UpdateOptions:
    """Options for update().

    Attributes:
        where: Records to update. update() derives it from the primary key when
            absent or None; a backend given no where matches every record and
            rejects an explicit None
        fields: Field names to write (default: every declared field set on the instance)
        validate: Run field validation before calling the backend
    """

    where: dict[str, Any] | None = UNSET
    fields: list[str] | None = None
    validate: bool = True


@dataclass
class RemoveOptions:
    """Options for remove().

    Attributes:
        where: Records to remove. remove() derives it from the primary key when
            absent or None; a backend given no where matches every record and
            rejects an explicit None
    """

    where: dict[str, Any] | None = UNSET


OptionsT = TypeVar("OptionsT", CreateOptions, ReadOptions, UpdateOptions, RemoveOptions)


def coerce_options(
    options_cls: type[OptionsT],
    options: OptionsT | Mapping[str, Any] | None,
) -> OptionsT:
    """
    Normalise options given as None, a mapping or an options instance.

    Raises:
        UsageError: On unknown option names or an unsupported options type
    """
    if options is None:
        return options_cls()
    if isinstance(options, options_cls):
        return options
    if isinstance(options, Mapping):
        known = {f.name for f in fields(options_cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise UsageError(f"Unknown {options_cls.__name__} option(s): {', '.join(unknown)}")
        return options_cls(**options)
    raise UsageError(
        f"options must be a {options_cls.__name__} or a mapping, got {type(options).__name__}"
    )
