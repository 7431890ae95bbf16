"""Test helpers - in-memory stand-in for the Notion API.

FakeClient answers the same get/post/patch calls as NotionClient from
dicts of pages and databases, applies partial page updates to its own
state, and records every call for assertions.
"""

from __future__ import annotations

import copy
from typing import Any

from notionlinks.errors import NotFoundError, RemoteError


# === Payload factories ===


def make_page(
    page_id: str,
    title: str | None = "",
    relations: dict[str, list[str]] | None = None,
    database_id: str | None = None,
    parent_page_id: str | None = None,
    title_property: str = "Name",
    extra: dict[str, dict] | None = None,
    url: str | None = None,
) -> dict[str, Any]:
    """Factory for raw page payloads.

    Args:
        page_id: Page id.
        title: Title text (defaults to page_id when empty); None omits the
            title property entirely.
        relations: Relation property name -> referenced ids.
        database_id: Parent database id.
        parent_page_id: Parent page id (used when database_id is None).
        title_property: Name of the title-typed property.
        extra: Additional raw properties.
        url: Page URL.
    """
    properties: dict[str, dict] = {}
    if title is not None:
        text = title or page_id
        properties[title_property] = {
            "type": "title",
            "title": [{"type": "text", "plain_text": text}],
        }
    for name, ids in (relations or {}).items():
        properties[name] = {"type": "relation", "relation": [{"id": i} for i in ids]}
    properties.update(extra or {})

    if database_id is not None:
        parent = {"type": "database_id", "database_id": database_id}
    elif parent_page_id is not None:
        parent = {"type": "page_id", "page_id": parent_page_id}
    else:
        parent = {"type": "workspace", "workspace": True}

    page: dict[str, Any] = {
        "object": "page",
        "id": page_id,
        "parent": parent,
        "properties": properties,
    }
    if url is not None:
        page["url"] = url
    return page


def make_database(
    database_id: str,
    title: str = "Tasks",
    relations: dict[str, str | None] | None = None,
    extra: dict[str, dict] | None = None,
) -> dict[str, Any]:
    """Factory for raw database payloads.

    Args:
        relations: Relation property name -> target database id (None for
            a relation entry that declares no target).
    """
    properties: dict[str, dict] = {"Name": {"type": "title", "title": {}}}
    for name, target in (relations or {}).items():
        entry: dict[str, Any] = {"type": "relation"}
        if target is not None:
            entry["relation"] = {"database_id": target}
        properties[name] = entry
    properties.update(extra or {})
    return {
        "object": "database",
        "id": database_id,
        "title": [{"plain_text": title}],
        "properties": properties,
    }


# === Fake client ===


class FakeClient:
    """In-memory NotionClient substitute.

    Args:
        pages: Raw page payloads.
        databases: Raw database payloads.
        queries: Database id -> ids of pages returned by its query.
        search: Ids of pages returned by any search.
        failing: Ids whose reads raise RemoteError(403).
    """

    def __init__(
        self,
        pages: list[dict] | None = None,
        databases: list[dict] | None = None,
        queries: dict[str, list[str]] | None = None,
        search: list[str] | None = None,
        failing: set[str] | None = None,
    ):
        self.pages = {p["id"]: p for p in pages or []}
        self.databases = {d["id"]: d for d in databases or []}
        self.queries = queries or {}
        self.search = search or []
        self.failing = set(failing or ())
        self.calls: list[tuple[str, str, Any]] = []
        self.patches: list[tuple[str, dict]] = []

    def _check(self, ident: str) -> None:
        if ident in self.failing:
            raise RemoteError(403, "Forbidden")

    def _page(self, page_id: str) -> dict:
        self._check(page_id)
        if page_id not in self.pages:
            raise NotFoundError(404, f"Could not find page with ID: {page_id}")
        return copy.deepcopy(self.pages[page_id])

    def get(self, path: str, query: dict | None = None) -> Any:
        self.calls.append(("GET", path, None))
        kind, _, ident = path.partition("/")
        if kind == "pages":
            return self._page(ident)
        if kind == "databases":
            self._check(ident)
            if ident not in self.databases:
                raise NotFoundError(404, f"Could not find database with ID: {ident}")
            return copy.deepcopy(self.databases[ident])
        raise AssertionError(f"Unexpected path {path}")

    def post(self, path: str, body: dict | None = None, query: dict | None = None) -> Any:
        self.calls.append(("POST", path, body))
        if path == "search":
            return {"results": [self._page(i) for i in self.search]}
        if path.startswith("databases/") and path.endswith("/query"):
            database_id = path.split("/")[1]
            self._check(database_id)
            return {"results": [self._page(i) for i in self.queries.get(database_id, [])]}
        raise AssertionError(f"Unexpected path {path}")

    def patch(self, path: str, body: dict | None = None) -> Any:
        self.calls.append(("PATCH", path, body))
        page_id = path.partition("/")[2]
        self._check(page_id)
        self.patches.append((page_id, copy.deepcopy(body)))
        stored = self.pages[page_id]["properties"]
        for name, payload in (body or {}).get("properties", {}).items():
            stored.setdefault(name, {"type": "relation"}).update(copy.deepcopy(payload))
        return copy.deepcopy(self.pages[page_id])

    def paths(self, method: str) -> list[str]:
        return [path for m, path, _ in self.calls if m == method]

    def close(self) -> None:
        pass
