"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from blog_pipeline.core.errors import InvalidEventError


@dataclass
class FeedItem:
    """Single entry of a parsed RSS feed."""

    title: str
    link: str
    body_html: str = ""
    published_at: Optional[str] = None
    cover_url: Optional[str] = None


@dataclass
class MetadataEnvelope:
    """Per-item metadata carried between stages inside the HTML payload."""

    title: str
    published_at: str
    source_url: str
    cover_url: Optional[str] = None
    language: Optional[str] = None


class ProcessedSet:
    """Ordered, grow-only set of already ingested feed links."""

    def __init__(self, links: Iterable[str] = ()) -> None:
        self._links: dict[str, None] = dict.fromkeys(links)

    def __contains__(self, link: object) -> bool:
        return link in self._links

    def __iter__(self) -> Iterator[str]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProcessedSet):
            return set(self._links) == set(other._links)
        if isinstance(other, (set, frozenset)):
            return set(self._links) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ProcessedSet({list(self._links)!r})"

    def union(self, links: Iterable[str]) -> "ProcessedSet":
        """Return a new set with ``links`` appended after the current ones."""
        merged = ProcessedSet(self._links)
        for link in links:
            merged._links.setdefault(link, None)
        return merged

    def to_list(self) -> list[str]:
        return list(self._links)


@dataclass
class ObjectEvent:
    """Object-creation notification from the blob store."""

    bucket: str
    name: str
    content_type: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ObjectEvent":
        """Validate a raw notification payload.

        Raises:
            InvalidEventError: If the payload is not a mapping with string
                ``bucket`` and ``name`` fields.
        """
        if not isinstance(payload, dict):
            raise InvalidEventError("No file data found in the event.")

        bucket = payload.get("bucket")
        name = payload.get("name")
        if not isinstance(bucket, str) or not bucket:
            raise InvalidEventError("Event is missing a bucket name")
        if not isinstance(name, str) or not name:
            raise InvalidEventError("Event is missing an object name")

        content_type = payload.get("contentType")
        if content_type is not None and not isinstance(content_type, str):
            raise InvalidEventError("Event contentType must be a string")

        return cls(bucket=bucket, name=name, content_type=content_type)


@dataclass(frozen=True)
class TranslatedName:
    """Identity recovered from a translated object's name."""

    base_name: str
    language: str


class StageStatus(str, Enum):
    """Terminal non-failure state of a stage invocation."""

    COMPLETED = "completed"
    NO_ITEMS = "no_items"
    NO_NEW_ITEMS = "no_new_items"
    SKIPPED = "skipped"


@dataclass
class StageResult:
    """Outcome of one stage invocation."""

    status: StageStatus
    message: str
    written: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.status == StageStatus.SKIPPED
