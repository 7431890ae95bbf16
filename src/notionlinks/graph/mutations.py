"""Mutations - Adding and removing relation links between pages.

LinkMutator rewrites exactly one relation property per page with a partial
update, so no other property and no unrelated reference is touched. Every
write is recorded in an in-memory MutationLog for reporting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import uuid4

from notionlinks.errors import PropertyTypeError
from notionlinks.graph.document import Document, DocumentAccessor
from notionlinks.graph.properties import RelationProperty

if TYPE_CHECKING:
    from notionlinks.client import NotionClient

logger = logging.getLogger(__name__)


@dataclass
class MutationEntry:
    """Single relation write.

    Attributes:
        operation: "link" or "unlink".
        document_id: Page whose property was written.
        property_name: The relation property written.
        before: Referenced ids before the write.
        after: Referenced ids sent in the write.
    """

    operation: str
    document_id: str
    property_name: str
    before: tuple[str, ...]
    after: tuple[str, ...]
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.id[:8]}] {self.operation}({self.document_id}.{self.property_name})"


class MutationLog:
    """Append-only record of writes made during one command."""

    def __init__(self) -> None:
        self._entries: list[MutationEntry] = []

    def append(self, entry: MutationEntry) -> None:
        self._entries.append(entry)

    def iter_entries(self) -> Iterator[MutationEntry]:
        """Iterate over all entries in chronological order."""
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> MutationEntry | None:
        """Return the most recent entry, or None if empty."""
        return self._entries[-1] if self._entries else None


class LinkStatus(Enum):
    """What happened on one side of a link or unlink."""

    LINKED = "linked"
    ALREADY_LINKED = "already_linked"
    UNLINKED = "unlinked"
    SKIPPED = "skipped"


@dataclass
class LinkOutcome:
    """Result for one direction of a link operation.

    Attributes:
        source: Page whose property is (or would be) written.
        target: Page being referenced.
        property_name: Relation property involved.
        status: What happened.
        reverse: True for the back-link side of a bidirectional call.
    """

    source: Document
    target: Document
    property_name: str
    status: LinkStatus
    reverse: bool = False


@dataclass
class LinkReport:
    """All outcomes of one link/unlink call plus the writes issued."""

    outcomes: list[LinkOutcome] = field(default_factory=list)
    log: MutationLog = field(default_factory=MutationLog)

    @property
    def forward(self) -> LinkOutcome:
        return self.outcomes[0]

    @property
    def reverse(self) -> LinkOutcome | None:
        return self.outcomes[1] if len(self.outcomes) > 1 else None


class LinkMutator:
    """Add or remove relation references, optionally on both pages.

    Args:
        client: Remote client used for reads and writes.
    """

    def __init__(self, client: NotionClient) -> None:
        self.accessor = DocumentAccessor(client)

    def link(
        self,
        source_id: str,
        target_id: str,
        property_name: str,
        bidirectional: bool = False,
    ) -> LinkReport:
        """Add target_id to source's relation property.

        Raises:
            PropertyTypeError: If the property is missing or not a relation
                on the source page.
            RemoteError: If any fetch or write fails.
        """
        source, target = self._fetch_pair(source_id, target_id)
        current = _require_relation(source, property_name)

        report = LinkReport()
        report.outcomes.append(self._add(source, target, property_name, current, report.log))

        # A self-link has no separate reverse side
        if bidirectional and source.id != target.id:
            back = target.relation(property_name)
            if back is None:
                report.outcomes.append(
                    LinkOutcome(target, source, property_name, LinkStatus.SKIPPED, reverse=True)
                )
            else:
                outcome = self._add(target, source, property_name, back, report.log)
                outcome.reverse = True
                report.outcomes.append(outcome)
        return report

    def unlink(
        self,
        source_id: str,
        target_id: str,
        property_name: str,
        bidirectional: bool = False,
    ) -> LinkReport:
        """Remove target_id from source's relation property.

        The filtered reference set is always written, so repeating the call
        leaves the same result.

        Raises:
            PropertyTypeError: If the property is missing or not a relation
                on the source page.
            RemoteError: If any fetch or write fails.
        """
        source, target = self._fetch_pair(source_id, target_id)
        current = _require_relation(source, property_name)

        report = LinkReport()
        report.outcomes.append(
            self._remove(source, target, property_name, current, report.log)
        )

        # A self-link has no separate reverse side
        if bidirectional and source.id != target.id:
            back = target.relation(property_name)
            if back is None:
                report.outcomes.append(
                    LinkOutcome(target, source, property_name, LinkStatus.SKIPPED, reverse=True)
                )
            else:
                outcome = self._remove(target, source, property_name, back, report.log)
                outcome.reverse = True
                report.outcomes.append(outcome)
        return report

    def _fetch_pair(self, source_id: str, target_id: str) -> tuple[Document, Document]:
        return (
            self.accessor.fetch_document(source_id),
            self.accessor.fetch_document(target_id),
        )

    def _add(
        self,
        page: Document,
        other: Document,
        name: str,
        current: RelationProperty,
        log: MutationLog,
    ) -> LinkOutcome:
        if other.id in current:
            return LinkOutcome(page, other, name, LinkStatus.ALREADY_LINKED)
        updated = current.with_id(other.id)
        self._write("link", page, name, current, updated, log)
        return LinkOutcome(page, other, name, LinkStatus.LINKED)

    def _remove(
        self,
        page: Document,
        other: Document,
        name: str,
        current: RelationProperty,
        log: MutationLog,
    ) -> LinkOutcome:
        updated = current.without_id(other.id)
        self._write("unlink", page, name, current, updated, log)
        return LinkOutcome(page, other, name, LinkStatus.UNLINKED)

    def _write(
        self,
        operation: str,
        page: Document,
        name: str,
        before: RelationProperty,
        after: RelationProperty,
        log: MutationLog,
    ) -> None:
        self.accessor.write_relation(page.id, name, after)
        page.properties[name] = after
        log.append(MutationEntry(operation, page.id, name, before.ids, after.ids))
        logger.debug(
            "%s %s.%s: %d -> %d refs", operation, page.id, name, len(before.ids), len(after.ids)
        )


def _require_relation(page: Document, name: str) -> RelationProperty:
    value = page.relation(name)
    if value is None:
        existing = page.properties.get(name)
        raise PropertyTypeError(name, page.id, existing.type if existing is not None else None)
    return value


__all__ = [
    "LinkMutator",
    "LinkReport",
    "LinkOutcome",
    "LinkStatus",
    "MutationEntry",
    "MutationLog",
]
