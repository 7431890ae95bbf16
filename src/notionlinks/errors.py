"""
notionlinks.errors - Failure taxonomy shared by the client and the graph engine.

Partial coverage is not represented here: skipped sources are a value on
the result objects (see notionlinks.graph.coverage), not an exception.
"""

from __future__ import annotations


class NotionLinksError(Exception):
    """Base class for all errors raised by notionlinks."""


class ConfigurationError(NotionLinksError):
    """Missing token or unreadable configuration."""


class RemoteError(NotionLinksError):
    """A remote API call failed.

    Attributes:
        status: HTTP status code, or 0 when no response was received.
        message: Message reported by the API (or the transport).
    """

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"Notion API Error ({status}): {message}")


class NotFoundError(RemoteError):
    """The requested id does not resolve (HTTP 404)."""


class RateLimitError(RemoteError):
    """The API kept rejecting requests with HTTP 429."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(429, message)


class PropertyTypeError(NotionLinksError):
    """A named property is missing or is not a relation property."""

    def __init__(
        self, property_name: str, document_id: str, actual_type: str | None = None
    ) -> None:
        self.property_name = property_name
        self.document_id = document_id
        self.actual_type = actual_type
        if actual_type is None:
            detail = "does not exist"
        else:
            detail = f"is a {actual_type} property"
        super().__init__(
            f'Property "{property_name}" is not a relation property '
            f"on {document_id} ({detail})"
        )


__all__ = [
    "NotionLinksError",
    "ConfigurationError",
    "RemoteError",
    "NotFoundError",
    "RateLimitError",
    "PropertyTypeError",
]
