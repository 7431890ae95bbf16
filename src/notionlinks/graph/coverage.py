"""Coverage - Sources skipped while building a snapshot.

A resolver or traversal that could not reach a secondary collection or
page records it here instead of failing. An empty PartialCoverage means
every source was reachable, which lets callers tell "nothing found" apart
from "something was unreachable".
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class SourceScope(Enum):
    """What kind of source was skipped."""

    COLLECTION = "collection"
    DOCUMENT = "document"


@dataclass(frozen=True)
class SkippedSource:
    """A collection or page that could not be read.

    Attributes:
        id: Id of the unreachable collection or page.
        scope: Whether it is a collection or a document.
        reason: One-line error description.
    """

    id: str
    scope: SourceScope
    reason: str

    def __str__(self) -> str:
        return f"{self.scope.value} {self.id} skipped: {self.reason}"


@dataclass
class PartialCoverage:
    """Ordered record of skipped sources for one run."""

    skipped: list[SkippedSource] = field(default_factory=list)

    def record(self, source_id: str, scope: SourceScope, error: Exception) -> None:
        self.skipped.append(SkippedSource(source_id, scope, str(error)))

    @property
    def complete(self) -> bool:
        return not self.skipped

    def __bool__(self) -> bool:
        """True when at least one source was skipped."""
        return bool(self.skipped)

    def __iter__(self) -> Iterator[SkippedSource]:
        yield from self.skipped

    def __len__(self) -> int:
        return len(self.skipped)

    def to_list(self) -> list[dict[str, str]]:
        return [
            {"id": s.id, "scope": s.scope.value, "reason": s.reason}
            for s in self.skipped
        ]


__all__ = ["SourceScope", "SkippedSource", "PartialCoverage"]
