"""Graph module - Relation graph and backlink engine.

Exports:
- Document: A fetched page with typed properties
- DocumentAccessor: Typed remote reads/writes
- document_title: Title extraction with "Untitled" fallback
- Collection / relation_properties: Database schema scanning
- BacklinkKind / Backlink: Inbound reference records
- BacklinkResolver / BacklinkReport: Backlink discovery
- LinkMutator / LinkReport / LinkStatus: Relation link writes
- GraphTraversal / RelationGraph / GraphNode / Edge: BFS traversal
- PartialCoverage / SkippedSource: Sources skipped during a run
"""

from notionlinks.graph.backlinks import BacklinkReport, BacklinkResolver
from notionlinks.graph.coverage import PartialCoverage, SkippedSource, SourceScope
from notionlinks.graph.document import Document, DocumentAccessor, document_title
from notionlinks.graph.GraphNode import GraphNode
from notionlinks.graph.mutations import LinkMutator, LinkReport, LinkStatus
from notionlinks.graph.relations import Backlink, BacklinkKind, Edge
from notionlinks.graph.schema import Collection, document_relations, relation_properties
from notionlinks.graph.traversal import GraphTraversal, RelationGraph

__all__ = [
    "Document",
    "DocumentAccessor",
    "document_title",
    "Collection",
    "relation_properties",
    "document_relations",
    "Backlink",
    "BacklinkKind",
    "BacklinkResolver",
    "BacklinkReport",
    "LinkMutator",
    "LinkReport",
    "LinkStatus",
    "GraphNode",
    "Edge",
    "GraphTraversal",
    "RelationGraph",
    "PartialCoverage",
    "SkippedSource",
    "SourceScope",
]
