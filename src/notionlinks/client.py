"""
notionlinks.client - Synchronous HTTP client for the Notion API.

Every call is issued and awaited before the next one starts; the graph
engine relies on this to stay within the per-token rate limit.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable

import httpx

from notionlinks.errors import (
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    RemoteError,
)

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"

TOKEN_ENV_VARS = ("NOTION_TOKEN", "NOTION_API_KEY")
TOKEN_FILES = (
    Path("~/.config/notion/api_key"),
    Path("~/.notion/token"),
)

# Backoff used when a 429 response carries no Retry-After header (seconds)
_BASE_RETRY_DELAY = 0.5


def resolve_token(explicit: str | None = None) -> str:
    """Resolve the API token.

    Priority: explicit value, NOTION_TOKEN, NOTION_API_KEY, then the
    first non-empty token file.

    Raises:
        ConfigurationError: If no token can be found.
    """
    if explicit:
        return explicit

    for var in TOKEN_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value

    for token_file in TOKEN_FILES:
        path = token_file.expanduser()
        try:
            token = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if token:
            return token

    raise ConfigurationError(
        "Notion API token not found. Set NOTION_TOKEN env var "
        "or create ~/.config/notion/api_key"
    )


class NotionClient:
    """Low-level client returning decoded JSON or raising a classified error.

    Args:
        token: Integration token sent as a bearer credential.
        base_url: API root.
        version: Value of the Notion-Version header.
        timeout: Per-request timeout in seconds.
        max_retries: How many times a 429 response is retried.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        sleep: Function used to wait between retries.
    """

    def __init__(
        self,
        token: str,
        base_url: str = NOTION_API_BASE,
        version: str = NOTION_VERSION,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.version = version
        self.max_retries = max_retries
        self._sleep = sleep
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def request(
        self,
        path: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one API request, retrying only on HTTP 429.

        Args:
            path: Resource path relative to the API root (e.g. "pages/abc").
            method: HTTP method.
            body: JSON body, if any.
            query: Query parameters; None values are dropped.

        Returns:
            The decoded JSON response.
        """
        params = {k: str(v) for k, v in (query or {}).items() if v is not None}
        attempt = 0
        while True:
            try:
                response = self._http.request(
                    method.upper(),
                    path.lstrip("/"),
                    json=body,
                    params=params or None,
                )
            except httpx.HTTPError as e:
                raise RemoteError(0, str(e)) from e

            if response.status_code != 429:
                return self._handle_response(response)

            retry_after = _retry_after(response)
            if attempt >= self.max_retries:
                raise RateLimitError(_error_message(response), retry_after=retry_after)
            delay = retry_after if retry_after is not None else _BASE_RETRY_DELAY * 2**attempt
            attempt += 1
            logger.debug(
                "Rate limited on %s %s, retry %d/%d in %.2fs",
                method.upper(),
                path,
                attempt,
                self.max_retries,
                delay,
            )
            self._sleep(delay)

    def _handle_response(self, response: httpx.Response) -> Any:
        if response.status_code == 404:
            raise NotFoundError(404, _error_message(response))
        if response.is_error:
            raise RemoteError(response.status_code, _error_message(response))
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise RemoteError(response.status_code, "Invalid response format from API") from e

    # Convenience methods
    def get(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return self.request(path, "GET", query=query)

    def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        return self.request(path, "POST", body=body, query=query)

    def patch(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return self.request(path, "PATCH", body=body)

    def delete(self, path: str) -> Any:
        return self.request(path, "DELETE")


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except json.JSONDecodeError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


__all__ = ["NotionClient", "resolve_token", "NOTION_API_BASE", "NOTION_VERSION"]
