"""
notionlinks.cli - Command-line interface.

Main entry point for the notionlinks CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from notionlinks import __version__
from notionlinks.commands import api_cmd, relations
from notionlinks.errors import NotionLinksError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="notionlinks",
        description="Backlinks, relation links and relation graphs for Notion pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  notionlinks relations backlinks <page_id>            # Pages linking here
  notionlinks rel bl <page_id> --format markdown       # Same, as markdown
  notionlinks rel link <src> <dst> -p Related          # Add a relation
  notionlinks rel unlink <src> <dst> -p Related --bidirectional
  notionlinks rel graph <page_id> --depth 2 --format dot | dot -Tsvg
  notionlinks api GET pages/<page_id>                  # Raw API request

Authentication:
  --token, or NOTION_TOKEN / NOTION_API_KEY, or ~/.config/notion/api_key

Configuration:
  .notionlinks.toml in the current or a parent directory, or --config PATH.
  Any value can be overridden with NOTIONLINKS_<SECTION>_<KEY>.
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"notionlinks {__version__}",
    )
    parser.add_argument(
        "--token",
        help="Notion API token (or set NOTION_TOKEN)",
        metavar="TOKEN",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (report unreachable sources, debug logging)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # relations command
    relations_parser = subparsers.add_parser(
        "relations",
        aliases=["rel"],
        help="Manage page relationships and backlinks",
    )
    relations_sub = relations_parser.add_subparsers(
        dest="relations_action", help="Relations actions"
    )

    backlinks_parser = relations_sub.add_parser(
        "backlinks",
        aliases=["bl"],
        help="Find pages that link to this page",
    )
    backlinks_parser.add_argument("page_id", help="Target page id")
    backlinks_parser.add_argument(
        "--format",
        choices=["text", "json", "markdown"],
        default=None,
        help="Output format (default: text)",
    )
    backlinks_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON (same as --format json)",
    )

    for name, verb in (("link", "Create"), ("unlink", "Remove")):
        link_parser = relations_sub.add_parser(
            name,
            help=f"{verb} a relation between two pages",
        )
        link_parser.add_argument("source_id", help="Page holding the relation property")
        link_parser.add_argument("target_id", help="Page being referenced")
        link_parser.add_argument(
            "-p",
            "--property",
            required=True,
            help="Relation property name",
            metavar="NAME",
        )
        link_parser.add_argument(
            "--bidirectional",
            action="store_true",
            help="Apply the same change on the target page",
        )

    graph_parser = relations_sub.add_parser(
        "graph",
        help="Show relationship graph for a page",
    )
    graph_parser.add_argument("page_id", help="Root page id")
    graph_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="How many levels deep to traverse (default: 1)",
        metavar="N",
    )
    graph_parser.add_argument(
        "--format",
        choices=["text", "dot", "json"],
        default=None,
        help="Output format (default: text)",
    )

    # api command
    api_parser = subparsers.add_parser(
        "api",
        help="Make a raw API request",
    )
    api_parser.add_argument("method", help="HTTP method (GET, POST, PATCH, DELETE)")
    api_parser.add_argument("path", help="Resource path, e.g. pages/<id>")
    api_parser.add_argument("-d", "--data", help="Request body as JSON", metavar="JSON")
    api_parser.add_argument(
        "-q",
        "--query",
        help="Query parameters as key=value,key=value",
        metavar="PARAMS",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install notionlinks[completion]
    # Then activate: eval "$(register-python-argcomplete notionlinks)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command in ("relations", "rel"):
            return relations.run(args)
        elif args.command == "api":
            return api_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except NotionLinksError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
