"""
HTTP utilities for the firefeed pipeline.

Every upstream source gets exactly one attempt per run; transient failures
surface to the caller, which treats them as an empty source.
"""

from typing import Optional

import httpx
from loguru import logger

from firefeed.config import settings


# Default headers for requests
DEFAULT_HEADERS = {
    "User-Agent": "firefeed/1.0 (active fire feed)",
    "Accept": "text/csv, application/vnd.google-earth.kmz, application/xml, */*",
}


class HTTPError(Exception):
    """Custom HTTP error with status code."""

    def __init__(self, message: str, status_code: int = None, response: httpx.Response = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


def fetch(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: Optional[int] = None,
    client: Optional[httpx.Client] = None,
) -> httpx.Response:
    """
    Fetch a URL once.

    Args:
        url: URL to fetch
        params: Query parameters
        headers: Additional headers to include
        timeout: Request timeout in seconds
        client: Existing client to reuse (a new one is opened otherwise)

    Returns:
        httpx.Response object

    Raises:
        HTTPError: For HTTP errors (4xx, 5xx)
        httpx.HTTPError: On transport failures
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    timeout = timeout or settings.pipeline.http_timeout

    logger.debug(f"Fetching GET {url}")

    if client is not None:
        response = client.get(url, params=params, headers=request_headers, timeout=timeout)
    else:
        with httpx.Client(timeout=timeout, follow_redirects=True) as new_client:
            response = new_client.get(url, params=params, headers=request_headers)

    if response.status_code >= 400:
        raise HTTPError(
            f"HTTP {response.status_code} {response.reason_phrase} for {url}: {response.text[:200]}",
            status_code=response.status_code,
            response=response,
        )

    logger.debug(f"Fetched {url} ({response.status_code}, {len(response.content)} bytes)")
    return response


def post_json(
    url: str,
    payload: dict,
    headers: Optional[dict] = None,
    timeout: Optional[int] = None,
    client: Optional[httpx.Client] = None,
) -> httpx.Response:
    """
    POST a JSON document once.

    Raises:
        HTTPError: For HTTP errors (4xx, 5xx)
    """
    request_headers = {"User-Agent": DEFAULT_HEADERS["User-Agent"], **(headers or {})}
    timeout = timeout or settings.pipeline.http_timeout

    if client is not None:
        response = client.post(url, json=payload, headers=request_headers, timeout=timeout)
    else:
        with httpx.Client(timeout=timeout, follow_redirects=True) as new_client:
            response = new_client.post(url, json=payload, headers=request_headers)

    if response.status_code >= 400:
        raise HTTPError(
            f"HTTP {response.status_code} for {url}: {response.text[:200]}",
            status_code=response.status_code,
            response=response,
        )

    return response
