"""RSS feed source for blog posts."""

import logging

import feedparser
import httpx

from blog_pipeline.core import FeedItem, FeedSource, PipelineError

logger = logging.getLogger(__name__)


class RSSFeedSource(FeedSource):
    """Fetch posts from a single RSS or Atom feed."""

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    async def fetch_items(self) -> list[FeedItem]:
        """Download and parse the feed."""
        logger.info("Fetching and parsing RSS feed from: %s", self.url)

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.url)
            response.raise_for_status()

        items = self._parse_feed(response.content)
        logger.info("RSS feed fetched and parsed successfully (%d items).", len(items))
        return items

    def _parse_feed(self, content: bytes | str) -> list[FeedItem]:
        """Parse feed XML into items.

        Raises:
            PipelineError: If the document is not a feed at all.
        """
        feed = feedparser.parse(content)

        if feed.bozo and not feed.entries and not feed.get("version"):
            raise PipelineError(f"Could not parse RSS feed: {feed.bozo_exception}")

        items = []
        for entry in feed.entries:
            link = (entry.get("link") or "").strip()
            if not link:
                logger.warning("Skipping feed entry without link: %s", entry.get("title"))
                continue

            items.append(FeedItem(
                title=(entry.get("title") or "").strip(),
                link=link,
                body_html=self._entry_body(entry),
                published_at=entry.get("published") or entry.get("updated") or None,
                cover_url=self._entry_cover(entry),
            ))

        return items

    @staticmethod
    def _entry_cover(entry) -> str | None:
        """First image from media:thumbnail, media:content or enclosures."""
        for media in entry.get("media_thumbnail") or []:
            if media.get("url"):
                return media["url"]
        for media in entry.get("media_content") or []:
            if media.get("url") and media.get("medium", "image") == "image":
                return media["url"]
        for enclosure in entry.get("enclosures") or []:
            if (enclosure.get("type") or "").startswith("image/") and enclosure.get("href"):
                return enclosure["href"]
        return None

    @staticmethod
    def _entry_body(entry) -> str:
        """Prefer full content (content:encoded) over the summary."""
        for content in entry.get("content") or []:
            value = content.get("value")
            if value:
                return value
        return entry.get("summary") or entry.get("description") or ""
