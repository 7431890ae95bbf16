"""GraphNode - A page as seen by the relation graph traversal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GraphNode:
    """A visited page.

    Attributes:
        id: Page id.
        title: Resolved page title.
        level: BFS depth at first discovery (0 for the root).
    """

    id: str
    title: str
    level: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "level": self.level}


__all__ = ["GraphNode"]
