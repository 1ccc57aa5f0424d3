"""In-memory reference backend."""

from rev_models.backends.inmemory.backend import InMemoryBackend

__all__ = ["InMemoryBackend"]
