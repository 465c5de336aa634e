"""
Session utilities for Indy operations.

This module provides utilities for creating HTTP clients with connection
retries and pooling, including clients that route through the Indy generic
proxy with tracking credentials.
"""

import importlib.util
import logging
from typing import Optional, Tuple

import httpx
from httpx import HTTPTransport

from .constants import DEFAULT_TIMEOUT

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries; failed batches are re-run as a whole, requests are not retried
MAX_RETRIES = 3

CONNECT_TIMEOUT = 10.0


def _http2_available() -> bool:
    """Return True when the optional h2 package is installed."""
    return importlib.util.find_spec("h2") is not None


def create_session_with_retry(
    timeout: float = DEFAULT_TIMEOUT,
    max_connections: int = 100,
    proxy: Optional[str] = None,
    proxy_auth: Optional[Tuple[str, str]] = None,
) -> httpx.Client:
    """
    Create an httpx client with connection retries and pooling.

    Args:
        timeout: Total timeout in seconds
        max_connections: Maximum number of connections in the pool
        proxy: Optional proxy URL every request is routed through
        proxy_auth: Optional (user, password) for the proxy

    Returns:
        Configured httpx.Client

    Example:
        >>> client = create_session_with_retry()
        >>> response = client.get("http://indy.example.com/api/stats/version-info")
        >>> # Through the generic proxy, tracked under a build
        >>> client = create_session_with_retry(
        ...     proxy="http://indy-proxy:8081", proxy_auth=("build-test-1+tracking", "pass")
        ... )
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(20, max_connections // 5),
    )
    timeout_config = httpx.Timeout(timeout, connect=CONNECT_TIMEOUT)

    use_http2 = _http2_available() and proxy is None
    if not use_http2:
        logging.debug("HTTP/2 disabled (h2 not installed or proxy in use)")

    if proxy:
        transport = HTTPTransport(
            limits=limits,
            retries=MAX_RETRIES,
            proxy=httpx.Proxy(url=proxy, auth=proxy_auth),
        )
    else:
        transport = HTTPTransport(limits=limits, retries=MAX_RETRIES, http2=use_http2)

    return httpx.Client(
        transport=transport,
        timeout=timeout_config,
        follow_redirects=True,
        http2=use_http2,
    )


__all__ = ["create_session_with_retry"]
