"""
rev-models - typed data access with pluggable backends.

This package provides:
- Field specs and the Model base class
- ModelRegistry / ModelManager: model metadata and named backends
- create / read / update / remove operations with validation
- InMemoryBackend: the reference storage backend

The GraphQL-over-HTTP backend lives in ``rev_api_client``.
"""

from rev_models._version import get_version as _get_version

__version__ = _get_version()

from rev_models.errors import (  # noqa: E402
    ModelError,
    OperationError,
    QueryError,
    RegistrationError,
    UsageError,
    ValidationError,
)
from rev_models.fields import FieldKind, FieldSpec  # noqa: E402
from rev_models.models import Model, ModelManager, ModelMeta, ModelRegistry  # noqa: E402
from rev_models.operations import (  # noqa: E402
    CreateOptions,
    ModelOperation,
    ModelOperationResult,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
    create,
    read,
    remove,
    update,
)
from rev_models.backends import Backend, InMemoryBackend  # noqa: E402
from rev_models.validation import ModelValidationResult  # noqa: E402

__all__ = [
    "Backend",
    "CreateOptions",
    "FieldKind",
    "FieldSpec",
    "InMemoryBackend",
    "Model",
    "ModelError",
    "ModelManager",
    "ModelMeta",
    "ModelOperation",
    "ModelOperationResult",
    "ModelRegistry",
    "ModelValidationResult",
    "OperationError",
    "QueryError",
    "ReadOptions",
    "RegistrationError",
    "RemoveOptions",
    "UpdateOptions",
    "UsageError",
    "ValidationError",
    "create",
    "read",
    "remove",
    "update",
]
