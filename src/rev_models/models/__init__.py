"""Model base class, metadata, registry and manager."""

from rev_models.models.meta import ModelMeta, build_model_meta
from rev_models.models.model import Model
from rev_models.models.registry import ModelRegistry
from rev_models.models.manager import ModelManager  # noqa: I001  (imports operations)

__all__ = [
    "Model",
    "ModelManager",
    "ModelMeta",
    "ModelRegistry",
    "build_model_meta",
]
