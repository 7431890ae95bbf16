"""
notionlinks - Relationship graph and backlink tools for Notion workspaces

Finds pages that reference a page (through relation properties or title
mentions), links and unlinks pages through relation properties on one or
both sides, and walks relation properties breadth-first to draw a graph.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notionlinks")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from notionlinks.client import NotionClient
from notionlinks.errors import (
    NotFoundError,
    NotionLinksError,
    PropertyTypeError,
    RemoteError,
)
from notionlinks.graph import (
    BacklinkResolver,
    GraphTraversal,
    LinkMutator,
    PartialCoverage,
    document_title,
)

__all__ = [
    "__version__",
    "NotionClient",
    "NotionLinksError",
    "NotFoundError",
    "PropertyTypeError",
    "RemoteError",
    "BacklinkResolver",
    "GraphTraversal",
    "LinkMutator",
    "PartialCoverage",
    "document_title",
]
