"""
rev-api-client - GraphQL-over-HTTP backend for rev-models.

Register a ModelApiBackend on a ModelRegistry to route model operations to a
remote GraphQL API.
"""

from rev_api_client.backend import ModelApiBackend
from rev_api_client.config import ApiClientConfig, get_api_config
from rev_api_client.errors import ApiResponseError

__all__ = [
    "ApiClientConfig",
    "ApiResponseError",
    "ModelApiBackend",
    "get_api_config",
]
