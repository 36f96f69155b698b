"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Union

from blog_pipeline.core.entities import FeedItem


class FeedSource(ABC):
    """Interface for fetching items from a feed."""

    @abstractmethod
    async def fetch_items(self) -> list[FeedItem]:
        """Fetch all items currently published in the feed."""
        pass


class BlobStore(ABC):
    """Interface for object storage."""

    @abstractmethod
    async def download(self, bucket: str, name: str) -> bytes:
        """Read an object. Raises BlobNotFoundError if it does not exist."""
        pass

    @abstractmethod
    async def upload(
        self, bucket: str, name: str, data: Union[bytes, str], content_type: str
    ) -> None:
        """Write an object, replacing any existing one at the same name."""
        pass


class Translator(ABC):
    """Interface for batch document translation."""

    @abstractmethod
    async def batch_translate(
        self,
        input_uri: str,
        output_uri_prefix: str,
        source_language: str,
        target_languages: list[str],
        mime_type: str = "text/html",
    ) -> str:
        """Translate one document and wait for the operation to finish.

        Returns:
            Name of the finished operation.
        """
        pass


class HtmlConverter(ABC):
    """Interface for HTML to Markdown conversion."""

    @abstractmethod
    def to_markdown(self, html: str) -> str:
        """Convert an HTML fragment to Markdown."""
        pass
