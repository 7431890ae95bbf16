"""Relations - Evidence kinds, backlink records and graph edges.

This module defines:
- BacklinkKind: Enum of evidence types for an inbound reference
- Backlink: One inbound reference to a target page
- Edge: A relation-property edge between two pages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notionlinks.graph.document import Document


class BacklinkKind(Enum):
    """How a backlink was discovered.

    - RELATION: the source holds the target in a relation property
    - MENTION: the source matched the target's title in full-text search
    """

    RELATION = "relation"
    MENTION = "mention"

    def outranks(self, other: BacklinkKind) -> bool:
        """Check if evidence of this kind replaces evidence of the other.

        Returns:
            True only for relation evidence over mention evidence.
        """
        return self is BacklinkKind.RELATION and other is BacklinkKind.MENTION


@dataclass
class Backlink:
    """An inbound reference to a target page.

    Attributes:
        kind: Evidence type.
        source: The referencing page.
        property_name: Relation property carrying the evidence
            (None for mentions).
    """

    kind: BacklinkKind
    source: Document
    property_name: str | None = None

    @property
    def source_id(self) -> str:
        return self.source.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "page_id": self.source.id,
            "page_title": self.source.title,
            "property": self.property_name,
            "url": self.source.url,
        }


@dataclass(frozen=True)
class Edge:
    """A directed relation edge discovered during traversal.

    Two edges between the same pages through different properties are
    distinct.
    """

    source: str
    target: str
    property_name: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.source, "to": self.target, "property": self.property_name}


__all__ = ["BacklinkKind", "Backlink", "Edge"]
