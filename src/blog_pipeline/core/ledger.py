"""Ledger of already ingested feed items to avoid duplicates."""

import json
import logging
from typing import Iterable

from blog_pipeline.core.entities import FeedItem, ProcessedSet
from blog_pipeline.core.errors import BlobNotFoundError
from blog_pipeline.core.interfaces import BlobStore
from blog_pipeline.core.naming import LEDGER_NAME

logger = logging.getLogger(__name__)


class ProcessedItemsLedger:
    """Track ingested feed links as a JSON array stored next to the raw HTML."""

    def __init__(self, store: BlobStore, bucket: str, object_name: str = LEDGER_NAME) -> None:
        self.store = store
        self.bucket = bucket
        self.object_name = object_name

    async def load(self) -> ProcessedSet:
        """Load previously processed links.

        A missing ledger is the first-run case. Any other read or decode
        failure is logged and also yields an empty set so ingestion is never
        blocked by the ledger.
        """
        try:
            content = await self.store.download(self.bucket, self.object_name)
        except BlobNotFoundError:
            logger.info("No previous processed items file found. Starting fresh.")
            return ProcessedSet()
        except Exception:
            logger.exception("Error reading processed items file %s", self.object_name)
            return ProcessedSet()

        try:
            links = _decode_links(content)
        except ValueError as e:
            logger.error("Error reading processed items file %s: %s", self.object_name, e)
            return ProcessedSet()

        logger.info("Loaded %d previously processed items.", len(links))
        return ProcessedSet(links)

    async def save(self, processed: ProcessedSet) -> None:
        """Overwrite the ledger with the full set (last writer wins)."""
        links = processed.to_list()
        await self.store.upload(
            self.bucket,
            self.object_name,
            json.dumps(links),
            content_type="application/json",
        )
        logger.info("Saved %d processed items to %s.", len(links), self.object_name)

    @staticmethod
    def diff_new(candidates: Iterable[FeedItem], loaded: ProcessedSet) -> list[FeedItem]:
        """Return candidates whose link is not in ``loaded``, in candidate order.

        Items without a link are never new, and a link repeated inside the
        candidates is only returned once.
        """
        new_items: list[FeedItem] = []
        seen_links: set[str] = set()

        for item in candidates:
            if not item.link or item.link in loaded or item.link in seen_links:
                continue
            seen_links.add(item.link)
            new_items.append(item)

        return new_items


def _decode_links(content: bytes) -> list[str]:
    """Decode the persisted JSON array of links.

    Raises:
        ValueError: If the content is not a UTF-8 JSON array of strings.
    """
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"invalid ledger content: {e}") from e

    if not isinstance(data, list) or not all(isinstance(link, str) for link in data):
        raise ValueError("ledger must be a JSON array of strings")
    return data
