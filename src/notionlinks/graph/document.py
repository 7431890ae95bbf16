"""Document - Page model and remote accessor.

This module provides:
- Document: a fetched page with typed properties
- document_title: title extraction that never assumes a property name
- DocumentAccessor: the remote reads/writes the graph engine needs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from notionlinks.graph.properties import (
    PropertyValue,
    RelationProperty,
    TitleProperty,
    parse_properties,
)

if TYPE_CHECKING:
    from notionlinks.client import NotionClient
    from notionlinks.graph.schema import Collection

UNTITLED = "Untitled"


@dataclass
class Document:
    """A page fetched from the workspace.

    Attributes:
        id: Page id.
        properties: Property name -> typed value, in API order.
        database_id: Parent collection id when the page lives in a database.
        parent_page_id: Parent page id when nested under another page.
        url: Page URL, when the API returned one.
    """

    id: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    database_id: str | None = None
    parent_page_id: str | None = None
    url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Document:
        parent = data.get("parent") or {}
        database_id = parent.get("database_id") if parent.get("type") == "database_id" else None
        page_id = parent.get("page_id") if parent.get("type") == "page_id" else None
        return cls(
            id=data["id"],
            properties=parse_properties(data.get("properties") or {}),
            database_id=database_id,
            parent_page_id=page_id,
            url=data.get("url"),
        )

    @property
    def title(self) -> str:
        return document_title(self)

    def relation(self, name: str) -> RelationProperty | None:
        """Return the named property if it is relation-typed, else None."""
        value = self.properties.get(name)
        return value if isinstance(value, RelationProperty) else None


def document_title(document: Document) -> str:
    """Concatenated text of the title-typed property, or "Untitled"."""
    for value in document.properties.values():
        if isinstance(value, TitleProperty):
            return value.text or UNTITLED
    return UNTITLED


class DocumentAccessor:
    """Typed reads and writes over a NotionClient.

    Args:
        client: Any object exposing get/post/patch like NotionClient.
    """

    def __init__(self, client: NotionClient) -> None:
        self.client = client

    def fetch_document(self, page_id: str) -> Document:
        return Document.from_api(self.client.get(f"pages/{page_id}"))

    def fetch_collection(self, database_id: str) -> Collection:
        from notionlinks.graph.schema import Collection

        return Collection.from_api(self.client.get(f"databases/{database_id}"))

    def query_collection(self, database_id: str, page_size: int) -> list[Document]:
        """First page of a database query; no pagination is attempted."""
        result = self.client.post(f"databases/{database_id}/query", {"page_size": page_size})
        return [Document.from_api(page) for page in result.get("results", [])]

    def search_documents(self, query: str, page_size: int) -> list[Document]:
        """Full-text search restricted to pages, first page only."""
        result = self.client.post(
            "search",
            {
                "query": query,
                "filter": {"property": "object", "value": "page"},
                "page_size": page_size,
            },
        )
        return [Document.from_api(page) for page in result.get("results", [])]

    def write_relation(self, page_id: str, name: str, value: RelationProperty) -> Any:
        """Persist a single relation property with a partial page update."""
        return self.client.patch(
            f"pages/{page_id}", {"properties": {name: value.to_payload()}}
        )


__all__ = ["Document", "DocumentAccessor", "document_title", "UNTITLED"]
