"""Field validation for model instances."""

from rev_models.validation.result import ModelValidationResult
from rev_models.validation.validate import validate_model
from rev_models.validation.validators import get_validators

__all__ = [
    "ModelValidationResult",
    "get_validators",
    "validate_model",
]
