"""Source adapters for fetching feed items."""

from blog_pipeline.adapters.sources.rss_feed_source import RSSFeedSource

__all__ = ["RSSFeedSource"]
