"""
notionlinks.commands - CLI command implementations
"""

from __future__ import annotations

import argparse
from typing import Any

__all__ = [
    "api_cmd",
    "relations",
    "open_client",
]


def open_client(args: argparse.Namespace, config: dict[str, Any]):
    """Create a NotionClient from the --token flag and the [api] config."""
    from notionlinks.client import NotionClient, resolve_token

    api = config["api"]
    return NotionClient(
        resolve_token(getattr(args, "token", None)),
        base_url=api["base_url"],
        version=api["version"],
        timeout=float(api["timeout"]),
        max_retries=int(api["max_retries"]),
    )
