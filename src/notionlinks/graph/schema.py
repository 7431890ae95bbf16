"""Schema - Database model and relation property scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from notionlinks.graph.document import Document
from notionlinks.graph.properties import RelationProperty


@dataclass
class Collection:
    """A database and its property schema.

    Attributes:
        id: Database id.
        title: Display title text runs.
        schema: Property name -> raw schema entry, in API order.
    """

    id: str
    title: list[str] = field(default_factory=list)
    schema: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Collection:
        return cls(
            id=data["id"],
            title=[run.get("plain_text", "") for run in data.get("title") or []],
            schema=dict(data.get("properties") or {}),
        )

    @property
    def display_title(self) -> str:
        return "".join(self.title)


def relation_properties(collection: Collection) -> list[tuple[str, str]]:
    """List (property name, target database id) for relation schema entries.

    Entries without a declared target are left out. Order follows the schema.
    """
    found = []
    for name, entry in collection.schema.items():
        if entry.get("type") != "relation":
            continue
        target = (entry.get("relation") or {}).get("database_id")
        if target:
            found.append((name, target))
    return found


def document_relations(document: Document) -> list[tuple[str, RelationProperty]]:
    """List (property name, value) for every relation property on a page."""
    return [
        (name, value)
        for name, value in document.properties.items()
        if isinstance(value, RelationProperty)
    ]


__all__ = ["Collection", "relation_properties", "document_relations"]
