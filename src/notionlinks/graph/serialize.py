"""Graph Serialization - Render traversal and backlink results.

This module provides pure functions that turn a RelationGraph into a
JSON-compatible dict, Graphviz DOT text or a readable outline, and a
BacklinkReport into a dict, plain text or markdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from notionlinks.graph.relations import BacklinkKind

if TYPE_CHECKING:
    from notionlinks.graph.backlinks import BacklinkReport
    from notionlinks.graph.traversal import RelationGraph

DEFAULT_LABEL_WIDTH = 30
DEFAULT_ID_WIDTH = 8
DEFAULT_MENTION_LIMIT = 10


def serialize_graph(graph: RelationGraph) -> dict[str, Any]:
    """Serialize a RelationGraph to a JSON-compatible dict.

    Args:
        graph: The traversal result.

    Returns:
        Dict with root, nodes, edges and metadata.
    """
    return {
        "root": graph.root_id,
        "nodes": [node.to_dict() for node in graph.nodes],
        "edges": [edge.to_dict() for edge in graph.edges],
        "metadata": {
            "node_count": len(graph.nodes),
            "edge_count": len(graph.edges),
            "max_depth": graph.max_depth,
            "skipped": graph.coverage.to_list(),
        },
    }


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def to_dot(
    graph: RelationGraph,
    label_width: int = DEFAULT_LABEL_WIDTH,
    id_width: int = DEFAULT_ID_WIDTH,
) -> str:
    """Generate a Graphviz digraph.

    Node identifiers are page ids cut to id_width characters; labels are
    titles cut to label_width characters.
    """
    lines = ["digraph G {", "  rankdir=LR;"]
    for node in graph.nodes:
        node_id = _dot_escape(node.id[:id_width])
        label = _dot_escape(node.title[:label_width])
        lines.append(f'  "{node_id}" [label="{label}"];')
    for edge in graph.edges:
        source = _dot_escape(edge.source[:id_width])
        target = _dot_escape(edge.target[:id_width])
        lines.append(f'  "{source}" -> "{target}" [label="{_dot_escape(edge.property_name)}"];')
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_outline(graph: RelationGraph, id_width: int = DEFAULT_ID_WIDTH) -> str:
    """Describe the root, what it links to, and what links to it."""
    root = graph.root
    if root is None:
        return "Relationship Graph: root page not found.\n"

    def name_of(page_id: str) -> str:
        node = graph.find_node(page_id)
        return node.title if node else page_id[:id_width]

    lines = ["Relationship Graph:", "", f"{root.title} (root)"]

    outgoing = graph.outgoing(root.id)
    if outgoing:
        lines.extend(["", "   → Links to:"])
        for edge in outgoing:
            lines.append(f"      {name_of(edge.target)} (via {edge.property_name})")

    incoming = graph.incoming(root.id)
    if incoming:
        lines.extend(["", "   ← Linked from:"])
        for edge in incoming:
            lines.append(f"      {name_of(edge.source)} (via {edge.property_name})")

    if not outgoing and not incoming:
        lines.extend(["", "   (no relations)"])

    lines.append("")
    return "\n".join(lines)


def serialize_backlinks(report: BacklinkReport) -> dict[str, Any]:
    """Serialize a BacklinkReport to a JSON-compatible dict."""
    return report.to_dict()


def backlinks_to_text(report: BacklinkReport, mention_limit: int = DEFAULT_MENTION_LIMIT) -> str:
    """Human-readable backlink listing grouped by evidence kind."""
    if not report.backlinks:
        return "No backlinks found.\n"

    relations = report.of_kind(BacklinkKind.RELATION)
    mentions = report.of_kind(BacklinkKind.MENTION)

    lines = [f"Found {len(report)} backlinks:", ""]
    if relations:
        lines.append("Direct Relations:")
        for b in relations:
            lines.append(f"   {b.source.title}")
            lines.append(f"   └─ via property: {b.property_name}")
            lines.append(f"      ID: {b.source.id}")
            lines.append("")
    if mentions:
        lines.append("Potential Mentions:")
        for b in mentions[:mention_limit]:
            lines.append(f"   {b.source.title}")
            lines.append(f"      ID: {b.source.id}")
        if len(mentions) > mention_limit:
            lines.append(f"   ... and {len(mentions) - mention_limit} more")
    lines.append("")
    return "\n".join(lines)


def backlinks_to_markdown(
    report: BacklinkReport, mention_limit: int = DEFAULT_MENTION_LIMIT
) -> str:
    """Markdown backlink listing, compact enough to paste into a prompt."""
    lines = [f'## Backlinks to "{report.target_title}"', ""]
    if not report.backlinks:
        lines.extend(["No backlinks found.", ""])
        return "\n".join(lines)

    relations = report.of_kind(BacklinkKind.RELATION)
    mentions = report.of_kind(BacklinkKind.MENTION)

    if relations:
        lines.append(f"### Direct Relations ({len(relations)})")
        for b in relations:
            lines.append(f"- **{b.source.title}** via `{b.property_name}`")
            lines.append(f"  ID: {b.source.id}")
        lines.append("")
    if mentions:
        lines.append(f"### Potential Mentions ({len(mentions)})")
        for b in mentions[:mention_limit]:
            lines.append(f"- {b.source.title}")
        if len(mentions) > mention_limit:
            lines.append(f"- ... and {len(mentions) - mention_limit} more")
        lines.append("")
    return "\n".join(lines)


__all__ = [
    "serialize_graph",
    "to_dot",
    "to_outline",
    "serialize_backlinks",
    "backlinks_to_text",
    "backlinks_to_markdown",
]
