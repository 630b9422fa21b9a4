"""
Session utilities for collaborator clients.

This module provides utilities for creating and configuring HTTP clients
with connection retries and connection pooling.
"""

from typing import Dict, Optional

import httpx
from httpx import HTTPTransport

from .._version import __version__

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport
MAX_RETRIES = 3

# Connect timeout (seconds)
CONNECT_TIMEOUT = 10.0

USER_AGENT = f"action-to-qiniu/{__version__}"


def create_session_with_retry(
    timeout: float = 30.0,
    max_connections: int = 100,
    headers: Optional[Dict[str, str]] = None,
    follow_redirects: bool = True,
) -> httpx.Client:
    """
    Create an httpx client with connection retries and connection pooling.

    Args:
        timeout: Total timeout in seconds (default: 30.0)
        max_connections: Maximum number of connections in the pool (default: 100)
        headers: Extra default headers (authorization, API version)
        follow_redirects: Follow redirects automatically

    Returns:
        Configured httpx.Client object

    Example:
        >>> client = create_session_with_retry(timeout=300.0)
        >>> response = client.get("https://api.github.com/")
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(20, max_connections // 5),
    )

    timeout_config = httpx.Timeout(timeout, connect=CONNECT_TIMEOUT)

    # httpx retries failed connections only; status-based retries are done per file
    transport = HTTPTransport(limits=limits, retries=MAX_RETRIES)

    default_headers = {"User-Agent": USER_AGENT}
    if headers:
        default_headers.update(headers)

    return httpx.Client(
        transport=transport,
        timeout=timeout_config,
        follow_redirects=follow_redirects,
        headers=default_headers,
    )


__all__ = ["create_session_with_retry", "USER_AGENT"]
