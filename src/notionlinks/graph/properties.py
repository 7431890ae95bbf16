"""Properties - Typed variants for page property values.

Raw property payloads look like ``{"type": "relation", "relation": [...]}``.
parse_property() turns each payload into one of:
- TitleProperty: the page title as text runs
- RelationProperty: ordered, duplicate-free referenced page ids
- OtherProperty: any other type, payload kept verbatim
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class TitleProperty:
    """Title-typed property value."""

    runs: tuple[str, ...] = ()

    type = "title"

    @property
    def text(self) -> str:
        return "".join(self.runs)


@dataclass(frozen=True)
class RelationProperty:
    """Relation-typed property value.

    Attributes:
        ids: Referenced page ids in stored order, without duplicates.
    """

    ids: tuple[str, ...] = ()

    type = "relation"

    def __contains__(self, page_id: object) -> bool:
        return page_id in self.ids

    def with_id(self, page_id: str) -> RelationProperty:
        """Return a copy with page_id appended (unchanged if present)."""
        if page_id in self.ids:
            return self
        return RelationProperty(self.ids + (page_id,))

    def without_id(self, page_id: str) -> RelationProperty:
        """Return a copy with every reference to page_id removed."""
        return RelationProperty(tuple(i for i in self.ids if i != page_id))

    def to_payload(self) -> dict[str, Any]:
        """Body fragment for a partial page update of this property."""
        return {"relation": [{"id": i} for i in self.ids]}


@dataclass(frozen=True)
class OtherProperty:
    """Property of a type the graph engine does not interpret."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict, compare=False)


PropertyValue = Union[TitleProperty, RelationProperty, OtherProperty]


def _unique(ids: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


def parse_property(payload: dict[str, Any]) -> PropertyValue:
    """Parse one raw property payload into its typed variant.

    Args:
        payload: Raw property dict with at least a "type" key.

    Returns:
        The matching PropertyValue variant.
    """
    prop_type = payload.get("type", "")
    if prop_type == "title":
        runs = payload.get("title") or []
        return TitleProperty(tuple(run.get("plain_text", "") for run in runs))
    if prop_type == "relation":
        refs = payload.get("relation") or []
        return RelationProperty(_unique([ref["id"] for ref in refs if "id" in ref]))
    return OtherProperty(prop_type, payload)


def parse_properties(raw: dict[str, Any]) -> dict[str, PropertyValue]:
    """Parse a property mapping, preserving its order."""
    return {name: parse_property(payload) for name, payload in raw.items()}


__all__ = [
    "TitleProperty",
    "RelationProperty",
    "OtherProperty",
    "PropertyValue",
    "parse_property",
    "parse_properties",
]
