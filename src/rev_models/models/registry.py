"""
Model registry.

The registry holds metadata for every registered model type and the backend
instances models are bound to by name. It is the context object passed into
every operation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from rev_models.config import get_config
from rev_models.errors import RegistrationError
from rev_models.models.meta import ModelMeta, build_model_meta
from rev_models.models.model import Model

if TYPE_CHECKING:
    from rev_models.backends.base import Backend
    from rev_models.fields import FieldSpec

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Registry of model metadata and named backends."""

    def __init__(self) -> None:
        self._models: dict[str, ModelMeta] = {}
        self._backends: dict[str, Backend] = {}

    # -------------------------------------------------------------------------
    # Models
    # -------------------------------------------------------------------------

    def register(
        self,
        model: type[Model],
        fields: Sequence[FieldSpec] | None = None,
        *,
        backend: str | None = None,
        label: str | None = None,
    ) -> ModelMeta:
        """
        Register a model type.

        Args:
            model: Model class
            fields: Field specs (defaults to the class's ``fields`` attribute)
            backend: Backend name (defaults to the configured default backend)
            label: Human-readable label

        Returns:
            The stored ModelMeta

        Raises:
            RegistrationError: If already registered or the declaration is malformed
        """
        if isinstance(model, type) and model.__name__ in self._models:
            raise RegistrationError(f"Model '{model.__name__}' is already registered")
        if fields is None:
            fields = getattr(model, "fields", None) or []

        meta = build_model_meta(
            model,
            fields,
            backend=backend or get_config().default_backend,
            label=label,
        )
        self._models[meta.name] = meta
        logger.debug(
            "Registered model %s (%d fields, backend '%s')",
            meta.name,
            len(meta.fields),
            meta.backend,
        )
        return meta

    def is_registered(self, model: type[Model] | Model) -> bool:
        model_cls = model if isinstance(model, type) else type(model)
        meta = self._models.get(model_cls.__name__)
        return meta is not None and meta.model is model_cls

    def get_metadata(self, model: type[Model] | Model) -> ModelMeta:
        """
        Get metadata for a model class or instance.

        Raises:
            RegistrationError: If the model was never registered
        """
        model_cls = model if isinstance(model, type) else type(model)
        meta = self._models.get(getattr(model_cls, "__name__", ""))
        if meta is None or meta.model is not model_cls:
            raise RegistrationError(
                f"Model '{getattr(model_cls, '__name__', model_cls)}' is not registered"
            )
        return meta

    def get_model_names(self) -> list[str]:
        return list(self._models)

    def hydrate(self, model: type[Model], data: Mapping[str, Any]) -> Model:
        """Build an instance of a registered model from a mapping."""
        return self.get_metadata(model).hydrate(data)

    # -------------------------------------------------------------------------
    # Backends
    # -------------------------------------------------------------------------

    def register_backend(self, name: str, backend: Backend) -> None:
        """Bind a backend instance to a name (re-binding replaces it)."""
        from rev_models.backends.base import Backend

        if not name:
            raise RegistrationError("Backend name must not be empty")
        if not isinstance(backend, Backend):
            raise RegistrationError(f"{backend!r} is not a Backend instance")
        self._backends[name] = backend
        logger.debug("Registered backend '%s' (%s)", name, type(backend).__name__)

    def get_backend(self, name: str) -> Backend:
        backend = self._backends.get(name)
        if backend is None:
            raise RegistrationError(f"Backend '{name}' is not registered")
        return backend

    def get_backend_names(self) -> list[str]:
        return list(self._backends)
