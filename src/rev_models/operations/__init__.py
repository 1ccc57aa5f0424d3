"""
Model operations.

Each entry point takes the registry as its first argument, checks the
registration and options, runs validation where applicable, and calls the
model's backend.
"""

from rev_models.operations.create import create
from rev_models.operations.options import (
    CreateOptions,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
)
from rev_models.operations.read import read
from rev_models.operations.remove import remove
from rev_models.operations.result import ModelOperation, ModelOperationResult, OperationName
from rev_models.operations.update import update

__all__ = [
    "CreateOptions",
    "ModelOperation",
    "ModelOperationResult",
    "OperationName",
    "ReadOptions",
    "RemoveOptions",
    "UpdateOptions",
    "create",
    "read",
    "remove",
    "update",
]
