"""Tests for ModelOperationResult and ModelValidationResult."""

from __future__ import annotations

import pytest

from rev_models.errors import UsageError
from rev_models.operations.result import ModelOperation, ModelOperationResult
from rev_models.validation.result import ModelValidationResult


@pytest.fixture
def result() -> ModelOperationResult:
    return ModelOperationResult(ModelOperation("create"))


class TestOperationResultDefaults:
    def test_empty_result(self) -> None:
        op = ModelOperation("create")
        res = ModelOperationResult(op)
        assert res.success is True
        assert res.operation is op
        assert res.errors == []
        assert res.validation is None
        assert res.result is None
        assert res.results is None
        assert res.meta is None


class TestAddError:
    def test_message_only(self, result: ModelOperationResult) -> None:
        result.add_error("The database has exploded!")
        assert result.errors == [{"message": "The database has exploded!"}]

    def test_message_and_code(self, result: ModelOperationResult) -> None:
        result.add_error("The database has exploded!", "db_error")
        assert result.errors == [{"message": "The database has exploded!", "code": "db_error"}]

    def test_message_code_and_data(self, result: ModelOperationResult) -> None:
        result.add_error("The database has exploded!", "db_error", {"dbms": "SQL Server"})
        assert result.errors == [
            {"message": "The database has exploded!", "code": "db_error", "dbms": "SQL Server"}
        ]

    def test_errors_kept_in_call_order(self, result: ModelOperationResult) -> None:
        result.add_error("Silly operation!")
        result.add_error("E-roar", "oh_no!", {"data": 42})
        assert result.errors == [
            {"message": "Silly operation!"},
            {"message": "E-roar", "code": "oh_no!", "data": 42},
        ]

    def test_sets_success_false(self, result: ModelOperationResult) -> None:
        assert result.success is True
        result.add_error("fail!")
        assert result.success is False

    def test_missing_message_raises(self, result: ModelOperationResult) -> None:
        with pytest.raises(UsageError, match="A message must be specified"):
            result.add_error(None)
        assert result.errors == []

    def test_non_mapping_data_raises_and_leaves_errors_unchanged(
        self, result: ModelOperationResult
    ) -> None:
        result.add_error("first")
        with pytest.raises(UsageError, match="non-mapping data"):
            result.add_error("Operation took too long", "timeout", 1000000)  # type: ignore[arg-type]
        assert result.errors == [{"message": "first"}]


class TestSuccessInvariant:
    def test_invalid_validation_makes_result_unsuccessful(
        self, result: ModelOperationResult
    ) -> None:
        validation = ModelValidationResult()
        result.validation = validation
        assert result.success is True
        validation.add_field_error("name", "Name is required", "required")
        assert result.success is False
        assert result.errors == []


class TestValidationResult:
    def test_starts_valid(self) -> None:
        validation = ModelValidationResult()
        assert validation.valid is True
        assert validation.field_errors == {}
        assert validation.model_errors == []

    def test_field_errors_grouped_by_field(self) -> None:
        validation = ModelValidationResult()
        validation.add_field_error("age", "too young", "min_value")
        validation.add_field_error("age", "not even", "custom", {"hint": "odd"})
        assert validation.valid is False
        assert validation.field_errors == {
            "age": [
                {"message": "too young", "code": "min_value"},
                {"message": "not even", "code": "custom", "hint": "odd"},
            ]
        }

    def test_model_error(self) -> None:
        validation = ModelValidationResult()
        validation.add_model_error("dates overlap", "overlap")
        assert validation.valid is False
        assert validation.model_errors == [{"message": "dates overlap", "code": "overlap"}]

    def test_non_mapping_data_raises(self) -> None:
        validation = ModelValidationResult()
        with pytest.raises(UsageError):
            validation.add_field_error("age", "bad", "x", ["not", "a", "mapping"])  # type: ignore[arg-type]
        assert validation.valid is True

    def test_dict_round_trip(self) -> None:
        validation = ModelValidationResult()
        validation.add_field_error("email", "bad email", "not_an_email")
        rebuilt = ModelValidationResult.from_dict(validation.to_dict())
        assert rebuilt.valid is False
        assert rebuilt.field_errors == validation.field_errors
