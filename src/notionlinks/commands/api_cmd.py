"""
notionlinks.commands.api_cmd - Raw API requests.

Usage:
    notionlinks api GET pages/<page_id>
    notionlinks api POST search -d '{"query": "Roadmap"}'
    notionlinks api GET users -q page_size=10
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notionlinks.client import NotionClient

METHODS = ("GET", "POST", "PATCH", "DELETE")


def parse_query(text: str | None) -> dict[str, str] | None:
    """Parse "key=value,key=value" into a dict; malformed pairs are ignored."""
    if not text:
        return None
    query = {}
    for pair in text.split(","):
        key, sep, value = pair.partition("=")
        if sep and key and value:
            query[key.strip()] = value.strip()
    return query or None


def run(args: argparse.Namespace, client: NotionClient | None = None) -> int:
    """Run the api command.

    Returns:
        Exit code (0 for success, 1 for bad input).
    """
    from notionlinks.commands import open_client
    from notionlinks.config import load_config

    method = args.method.upper()
    if method not in METHODS:
        print(f"Error: Unsupported method {args.method}", file=sys.stderr)
        return 1

    body: dict[str, Any] | None = None
    if args.data:
        try:
            body = json.loads(args.data)
        except json.JSONDecodeError as e:
            print(f"Error: Invalid JSON body: {e}", file=sys.stderr)
            return 1

    owned = None
    if client is None:
        owned = client = open_client(args, load_config(getattr(args, "config", None)))
    try:
        result = client.request(args.path, method, body=body, query=parse_query(args.query))
    finally:
        if owned is not None:
            owned.close()

    print(json.dumps(result, indent=2))
    return 0
