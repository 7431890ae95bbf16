"""Traversal - Breadth-first walk over relation properties.

Starting from a root page, pages are fetched one at a time in BFS order up
to max_depth. Each page is recorded once, at the depth where it was first
reached. Pages at max_depth are recorded but not expanded, so no edge
leaves them. The visited set guarantees termination on cyclic relations.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from notionlinks.errors import RemoteError
from notionlinks.graph.coverage import PartialCoverage, SourceScope
from notionlinks.graph.document import DocumentAccessor
from notionlinks.graph.GraphNode import GraphNode
from notionlinks.graph.relations import Edge
from notionlinks.graph.schema import document_relations

if TYPE_CHECKING:
    from notionlinks.client import NotionClient

logger = logging.getLogger(__name__)


@dataclass
class RelationGraph:
    """Nodes and edges discovered from one root."""

    root_id: str
    max_depth: int
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    coverage: PartialCoverage = field(default_factory=PartialCoverage)

    def find_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def root(self) -> GraphNode | None:
        return self.find_node(self.root_id)

    def outgoing(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.source == node_id]

    def incoming(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.target == node_id]


class GraphTraversal:
    """Build a RelationGraph by walking relation properties.

    Args:
        client: Remote client used to fetch pages.
    """

    def __init__(self, client: NotionClient) -> None:
        self.accessor = DocumentAccessor(client)

    def traverse(self, root_id: str, max_depth: int) -> RelationGraph:
        """Walk relations breadth-first from root_id.

        Args:
            root_id: Page to start from (level 0).
            max_depth: Deepest level recorded; must be >= 0.

        Returns:
            The discovered graph. Unreachable non-root pages are listed in
            its coverage instead of raising.

        Raises:
            ValueError: If max_depth is negative.
            RemoteError: If the root page cannot be fetched.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")

        graph = RelationGraph(root_id=root_id, max_depth=max_depth)
        visited: set[str] = set()
        queue: deque[tuple[str, int]] = deque([(root_id, 0)])

        while queue:
            page_id, level = queue.popleft()
            if page_id in visited or level > max_depth:
                continue
            visited.add(page_id)

            try:
                page = self.accessor.fetch_document(page_id)
            except RemoteError as e:
                if level == 0:
                    raise
                logger.debug("Skipping page %s at level %d: %s", page_id, level, e)
                graph.coverage.record(page_id, SourceScope.DOCUMENT, e)
                continue

            # Ids may arrive undashed; the fetched page carries the canonical form
            if page.id != page_id and page.id in visited:
                continue
            visited.add(page.id)
            if level == 0:
                graph.root_id = page.id

            graph.nodes.append(GraphNode(page.id, page.title, level))
            if level + 1 > max_depth:
                continue

            for prop_name, value in document_relations(page):
                for ref_id in value.ids:
                    graph.edges.append(Edge(page.id, ref_id, prop_name))
                    if ref_id not in visited:
                        queue.append((ref_id, level + 1))

        return graph


__all__ = ["GraphTraversal", "RelationGraph"]
