"""
API client configuration.

Environment variables:
    - REV_API_URL: GraphQL endpoint (default: http://localhost:3000/graphql)
    - REV_API_TIMEOUT: request timeout in seconds for the default client (default: 30)
    - REV_API_TOKEN: bearer token sent by the default client (optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import cache


@dataclass(frozen=True)
class ApiClientConfig:
    """Configuration for ModelApiBackend.

    Attributes:
        url: GraphQL endpoint URL
        timeout: Timeout applied by the default httpx client
        headers: Headers sent by the default httpx client
    """

    url: str = "http://localhost:3000/graphql"
    timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)


@cache
def get_api_config() -> ApiClientConfig:
    """Load API client configuration from environment variables."""
    timeout = os.environ.get("REV_API_TIMEOUT", "")
    try:
        timeout_s = float(timeout) if timeout else 30.0
    except ValueError:
        raise ValueError(f"REV_API_TIMEOUT must be a number, got '{timeout}'") from None

    headers: dict[str, str] = {}
    token = os.environ.get("REV_API_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return ApiClientConfig(
        url=os.environ.get("REV_API_URL") or "http://localhost:3000/graphql",
        timeout=timeout_s,
        headers=headers,
    )
