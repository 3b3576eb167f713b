# pyright: reportExplicitAny=false
"""HTTP helpers shared by the API clients."""

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from strategysuite.utils._json import load_json


@retry(
    retry=retry_if_exception_type((httpx.ConnectError, httpx.TimeoutException)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
    reraise=True,
)
async def send_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    payload: dict[str, Any] | None = None,
) -> httpx.Response:
    """Send a request, retrying connection errors and timeouts.

    Args:
        client: The httpx client to use.
        method: HTTP method.
        url: Target URL, relative to the client's base URL.
        payload: Optional JSON body.

    Returns:
        The httpx response, whatever its status.

    Raises:
        httpx.ConnectError: If connection fails after retries.
        httpx.TimeoutException: If request times out after retries.
    """
    return await client.request(method=method, url=url, json=payload)


def error_message(response: httpx.Response) -> str:
    """Extract the ``message`` of an ``{error, message}`` body, else the status."""
    body = load_json(response.content)
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return str(body["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}"
