"""
notionlinks.commands.relations - Backlinks, linking and relation graphs.

Usage:
    notionlinks relations backlinks <page_id>              # Who links here
    notionlinks relations backlinks <page_id> -j           # JSON output
    notionlinks relations link <src> <dst> -p Related      # Add a relation
    notionlinks relations unlink <src> <dst> -p Related --bidirectional
    notionlinks relations graph <page_id> --depth 2 --format dot
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notionlinks.client import NotionClient
    from notionlinks.graph.coverage import PartialCoverage
    from notionlinks.graph.mutations import LinkReport


def run(args: argparse.Namespace, client: NotionClient | None = None) -> int:
    """Run the relations command.

    Args:
        args: Parsed CLI arguments.
        client: Client to use; one is opened from config when None.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    from notionlinks.commands import open_client
    from notionlinks.config import load_config

    action = getattr(args, "relations_action", None)
    handlers = {
        "backlinks": _backlinks,
        "bl": _backlinks,
        "link": _link,
        "unlink": _unlink,
        "graph": _graph,
    }
    handler = handlers.get(action)
    if handler is None:
        print("Usage: notionlinks relations <backlinks|link|unlink|graph>", file=sys.stderr)
        return 1

    config = load_config(getattr(args, "config", None))
    if client is not None:
        return handler(args, client, config)

    owned = open_client(args, config)
    try:
        return handler(args, owned, config)
    finally:
        owned.close()


def _report_coverage(coverage: PartialCoverage, args: argparse.Namespace) -> None:
    """Print skipped sources to stderr in verbose mode only."""
    if not coverage or not getattr(args, "verbose", False):
        return
    print(f"Warning: {len(coverage)} source(s) could not be read:", file=sys.stderr)
    for skipped in coverage:
        print(f"  {skipped}", file=sys.stderr)


def _backlinks(args: argparse.Namespace, client: NotionClient, config: dict[str, Any]) -> int:
    from notionlinks.graph.backlinks import BacklinkResolver
    from notionlinks.graph.serialize import (
        backlinks_to_markdown,
        backlinks_to_text,
        serialize_backlinks,
    )

    settings = config["backlinks"]
    output_format = "json" if getattr(args, "json", False) else args.format or "text"
    mention_limit = int(settings["mention_limit"])

    resolver = BacklinkResolver(
        client,
        search_page_size=int(settings["search_page_size"]),
        query_page_size=int(settings["query_page_size"]),
    )
    report = resolver.find_backlinks(args.page_id)
    _report_coverage(report.coverage, args)

    if output_format == "json":
        print(json.dumps(serialize_backlinks(report), indent=2))
    elif output_format == "markdown":
        print(backlinks_to_markdown(report, mention_limit), end="")
    else:
        print(f"Finding backlinks to: {report.target_title}\n")
        if not report.in_database:
            print("Note: Page is not in a database. Only title mentions were checked.\n")
        print(backlinks_to_text(report, mention_limit), end="")
    return 0


def _link(args: argparse.Namespace, client: NotionClient, config: dict[str, Any]) -> int:
    from notionlinks.graph.mutations import LinkMutator

    report = LinkMutator(client).link(
        args.source_id, args.target_id, args.property, bidirectional=args.bidirectional
    )
    _print_link_report(report, args)
    return 0


def _unlink(args: argparse.Namespace, client: NotionClient, config: dict[str, Any]) -> int:
    from notionlinks.graph.mutations import LinkMutator

    report = LinkMutator(client).unlink(
        args.source_id, args.target_id, args.property, bidirectional=args.bidirectional
    )
    _print_link_report(report, args)
    return 0


def _print_link_report(report: LinkReport, args: argparse.Namespace) -> None:
    from notionlinks.graph.mutations import LinkStatus

    for outcome in report.outcomes:
        source = outcome.source.title
        target = outcome.target.title
        suffix = " (bidirectional)" if outcome.reverse else ""
        if outcome.status is LinkStatus.LINKED:
            print(f"Linked: {source} → {target}{suffix}")
            if not outcome.reverse:
                print(f"   Property: {outcome.property_name}")
        elif outcome.status is LinkStatus.ALREADY_LINKED:
            print(f"Already linked: {source} → {target}{suffix}")
        elif outcome.status is LinkStatus.UNLINKED:
            print(f"Unlinked: {source} ✕ {target}{suffix}")
        else:
            print(
                f'Warning: Skipped bidirectional update, "{outcome.property_name}" '
                f"is not a relation property on {source}"
            )

    if getattr(args, "verbose", False) and len(report.log):
        print(f"Wrote {len(report.log)} update(s):", file=sys.stderr)
        for entry in report.log.iter_entries():
            print(
                f"  {entry}: {len(entry.before)} -> {len(entry.after)} refs",
                file=sys.stderr,
            )


def _graph(args: argparse.Namespace, client: NotionClient, config: dict[str, Any]) -> int:
    from notionlinks.graph.serialize import serialize_graph, to_dot, to_outline
    from notionlinks.graph.traversal import GraphTraversal

    settings = config["graph"]
    depth = args.depth if args.depth is not None else int(settings["depth"])
    output_format = args.format or settings["format"]
    if depth < 0:
        print("Error: --depth must be 0 or greater", file=sys.stderr)
        return 1

    graph = GraphTraversal(client).traverse(args.page_id, depth)
    _report_coverage(graph.coverage, args)

    if output_format == "json":
        print(json.dumps(serialize_graph(graph), indent=2))
    elif output_format == "dot":
        print(
            to_dot(
                graph,
                label_width=int(settings["label_width"]),
                id_width=int(settings["id_width"]),
            ),
            end="",
        )
    else:
        print(f"Found {len(graph.nodes)} nodes, {len(graph.edges)} edges.\n")
        print(to_outline(graph, id_width=int(settings["id_width"])), end="")
    return 0
