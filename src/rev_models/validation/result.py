"""Field and model validation results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rev_models.errors import UsageError


class ModelValidationResult:
    """
    Outcome of validating one model instance.

    Attributes:
        valid: False once any field or model error was added
        field_errors: Field name -> list of error dicts
        model_errors: Errors not tied to one field
    """

    def __init__(self) -> None:
        self.valid = True
        self.field_errors: dict[str, list[dict[str, Any]]] = {}
        self.model_errors: list[dict[str, Any]] = []

    @staticmethod
    def _make_error(
        message: str | None, code: str | None, data: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        if not message:
            raise UsageError("A message must be specified for the validation error")
        if data is not None and not isinstance(data, Mapping):
            raise UsageError("You cannot add non-mapping data to a validation result")
        error: dict[str, Any] = {"message": message}
        if code is not None:
            error["code"] = code
        if data:
            error.update(data)
        return error

    def add_field_error(
        self,
        field_name: str,
        message: str | None,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        error = self._make_error(message, code, data)
        self.field_errors.setdefault(field_name, []).append(error)
        self.valid = False

    def add_model_error(
        self,
        message: str | None,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        error = self._make_error(message, code, data)
        self.model_errors.append(error)
        self.valid = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "fieldErrors": {k: list(v) for k, v in self.field_errors.items()},
            "modelErrors": list(self.model_errors),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelValidationResult:
        """Rebuild a result from its to_dict() form (e.g. a remote API payload)."""
        result = cls()
        for field_name, errors in (data.get("fieldErrors") or {}).items():
            for error in errors:
                result.field_errors.setdefault(field_name, []).append(dict(error))
        result.model_errors = [dict(e) for e in data.get("modelErrors") or []]
        result.valid = bool(data.get("valid", True)) and not (
            result.field_errors or result.model_errors
        )
        return result

    def __repr__(self) -> str:
        return (
            f"ModelValidationResult(valid={self.valid}, "
            f"field_errors={self.field_errors!r}, model_errors={self.model_errors!r})"
        )
