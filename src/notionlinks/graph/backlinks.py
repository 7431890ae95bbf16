"""Backlink resolver - finds every page that references a target page.

Evidence comes from two passes:
- relation pass: pages in databases reachable from the target's own
  database schema whose relation properties contain the target id
- mention pass: full-text search for the target's title

Records are deduplicated by source page. Relation evidence always wins
over a mention of the same page; otherwise first-seen order is kept.

The relation pass reads a single page of each candidate database
(query_page_size entries), so very large databases under-report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from notionlinks.errors import RemoteError
from notionlinks.graph.coverage import PartialCoverage, SourceScope
from notionlinks.graph.document import Document, DocumentAccessor
from notionlinks.graph.relations import Backlink, BacklinkKind
from notionlinks.graph.schema import document_relations, relation_properties

if TYPE_CHECKING:
    from notionlinks.client import NotionClient

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PAGE_SIZE = 50
DEFAULT_QUERY_PAGE_SIZE = 100


@dataclass
class BacklinkReport:
    """Result of one backlink resolution.

    Iterating the report yields the ordered backlink records.
    """

    target_id: str
    target_title: str
    backlinks: list[Backlink] = field(default_factory=list)
    coverage: PartialCoverage = field(default_factory=PartialCoverage)
    in_database: bool = True

    def __iter__(self) -> Iterator[Backlink]:
        yield from self.backlinks

    def __len__(self) -> int:
        return len(self.backlinks)

    def of_kind(self, kind: BacklinkKind) -> list[Backlink]:
        return [b for b in self.backlinks if b.kind is kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": {"id": self.target_id, "title": self.target_title},
            "backlinks": [b.to_dict() for b in self.backlinks],
            "skipped": self.coverage.to_list(),
        }


class BacklinkResolver:
    """Resolve inbound references to a page.

    Args:
        client: Remote client used for every read.
        search_page_size: Result bound for the title search.
        query_page_size: Entries read from each candidate database.
    """

    def __init__(
        self,
        client: NotionClient,
        search_page_size: int = DEFAULT_SEARCH_PAGE_SIZE,
        query_page_size: int = DEFAULT_QUERY_PAGE_SIZE,
    ) -> None:
        self.accessor = DocumentAccessor(client)
        self.search_page_size = search_page_size
        self.query_page_size = query_page_size

    def find_backlinks(self, target_id: str) -> BacklinkReport:
        """Find pages referencing target_id.

        Raises:
            RemoteError: If the target page itself cannot be fetched.
        """
        target = self.accessor.fetch_document(target_id)
        report = BacklinkReport(
            target_id=target_id,
            target_title=target.title,
            in_database=target.database_id is not None,
        )

        evidence: list[Backlink] = []
        if target.database_id is not None:
            evidence.extend(self._relation_pass(target, report.coverage))
        evidence.extend(self._mention_pass(target))

        report.backlinks = _merge_backlinks(evidence)
        return report

    def _relation_pass(self, target: Document, coverage: PartialCoverage) -> list[Backlink]:
        """Scan databases the target's database relates to."""
        database_id = target.database_id
        try:
            collection = self.accessor.fetch_collection(database_id)
        except RemoteError as e:
            logger.debug("Skipping database %s: %s", database_id, e)
            coverage.record(database_id, SourceScope.COLLECTION, e)
            return []

        found: list[Backlink] = []
        scanned: set[str] = set()
        for prop_name, related_db in relation_properties(collection):
            # Several properties may point at the same database; read it once
            if related_db in scanned:
                continue
            scanned.add(related_db)
            try:
                entries = self.accessor.query_collection(related_db, self.query_page_size)
            except RemoteError as e:
                logger.debug("Skipping database %s (via %s): %s", related_db, prop_name, e)
                coverage.record(related_db, SourceScope.COLLECTION, e)
                continue
            for entry in entries:
                found.extend(_relation_hits(entry, target.id))
        return found

    def _mention_pass(self, target: Document) -> list[Backlink]:
        """Classify title search hits as relations or mentions."""
        found: list[Backlink] = []
        for page in self.accessor.search_documents(target.title, self.search_page_size):
            if page.id == target.id:
                continue
            hits = _relation_hits(page, target.id)
            if hits:
                found.extend(hits)
            else:
                found.append(Backlink(BacklinkKind.MENTION, page))
        return found


def _relation_hits(page: Document, target_id: str) -> list[Backlink]:
    """One relation record per relation property of page holding target_id."""
    return [
        Backlink(BacklinkKind.RELATION, page, name)
        for name, value in document_relations(page)
        if target_id in value
    ]


def _merge_backlinks(evidence: list[Backlink]) -> list[Backlink]:
    """Keep one record per source page in first-seen order.

    A later relation record replaces an earlier mention in place; nothing
    replaces a relation record.
    """
    merged: dict[str, Backlink] = {}
    for backlink in evidence:
        existing = merged.get(backlink.source_id)
        if existing is None or backlink.kind.outranks(existing.kind):
            merged[backlink.source_id] = backlink
    return list(merged.values())


__all__ = ["BacklinkResolver", "BacklinkReport"]
