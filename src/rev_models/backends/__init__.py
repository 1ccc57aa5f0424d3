"""
Storage backends.

Backends implement the Backend contract and are bound to names on a
ModelRegistry with register_backend().
"""

from rev_models.backends.base import Backend
from rev_models.backends.inmemory import InMemoryBackend

__all__ = ["Backend", "InMemoryBackend"]
