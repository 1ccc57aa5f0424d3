"""
Model base class.

A model instance is a bag of field values tagged with its model type. A field
is *set* when the attribute exists on the instance:

    class Post(Model):
        fields = [auto_number_field("id", primary_key=True), text_field("title")]

    post = Post(title="Hello")
    post.is_set("title")  # True
    post.is_set("id")     # False
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from rev_models.fields import FieldSpec


class Model:
    """Base class for model types.

    Subclasses may declare their fields in a ``fields`` class attribute; the
    registry reads it when no field list is passed to register().
    """

    fields: ClassVar[list[FieldSpec] | None] = None

    def __init__(self, data: Mapping[str, Any] | None = None, **values: Any) -> None:
        for name, value in {**(data or {}), **values}.items():
            setattr(self, name, value)

    def is_set(self, name: str) -> bool:
        return name in self.__dict__

    def get(self, name: str, default: Any = None) -> Any:
        return self.__dict__.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.__dict__)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{type(self).__name__}({values})"
