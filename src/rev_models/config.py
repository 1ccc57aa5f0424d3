"""
Runtime configuration for rev-models.

Settings are read once from environment variables:

- REV_DEFAULT_BACKEND: backend name models are bound to (default: "default")
- REV_READ_LIMIT: default page size for read() (default: 20)
- REV_LOG_LEVEL: level used by setup_logging() (default: WARNING)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import cache


@dataclass(frozen=True)
class ModelsConfig:
    """Model layer configuration.

    Attributes:
        default_backend: Backend name used when register() is not given one
        read_limit: Default ``limit`` for read operations
        log_level: Logging level name
    """

    default_backend: str = "default"
    read_limit: int = 20
    log_level: str = "WARNING"


@cache
def get_config() -> ModelsConfig:
    """Load model configuration from environment variables."""
    limit = os.environ.get("REV_READ_LIMIT", "")
    try:
        read_limit = int(limit) if limit else 20
    except ValueError:
        raise ValueError(f"REV_READ_LIMIT must be an integer, got '{limit}'") from None
    if read_limit < 1:
        raise ValueError(f"REV_READ_LIMIT must be positive, got {read_limit}")

    return ModelsConfig(
        default_backend=os.environ.get("REV_DEFAULT_BACKEND") or "default",
        read_limit=read_limit,
        log_level=(os.environ.get("REV_LOG_LEVEL") or "WARNING").upper(),
    )
