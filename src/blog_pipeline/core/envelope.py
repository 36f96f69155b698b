"""Metadata envelope embedded at the head of staged HTML documents.

The envelope is a hidden ``<div>`` whose ``data-*`` attributes carry the
title, publish date, source URL and optional cover image of a post. It
survives machine translation untouched and is stripped again before the body
is rendered.
"""

import html
import re
from datetime import datetime, timezone
from typing import Optional

from blog_pipeline.core.entities import MetadataEnvelope

UNTITLED = "Untitled Post"
UNKNOWN_URL = "No URL"

MARKER_OPEN = '<div style="display:none;"'

_MARKER_RE = re.compile(r'<div style="display:none;"[^>]*>.*?</div>\n?', re.DOTALL)
_ATTRIBUTE_RES = {
    "title": re.compile(r'data-title="([^"]*)"'),
    "pubdate": re.compile(r'data-pubdate="([^"]*)"'),
    "url": re.compile(r'data-url="([^"]*)"'),
    "cover": re.compile(r'data-cover="([^"]*)"'),
}


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def encode(meta: MetadataEnvelope) -> str:
    """Build the hidden marker element for ``meta``."""
    attributes = [
        ("data-title", meta.title),
        ("data-pubdate", meta.published_at),
        ("data-url", meta.source_url),
        ("data-cover", meta.cover_url),
    ]
    rendered = " ".join(
        f'{name}="{html.escape(value, quote=True)}"'
        for name, value in attributes
        if value is not None
    )
    return f"{MARKER_OPEN} {rendered}></div>"


def wrap(meta: MetadataEnvelope, body_html: str) -> str:
    """Prefix ``body_html`` with the marker for ``meta``."""
    return f"{encode(meta)}\n{body_html}"


def _lookup(key: str, source: str) -> Optional[str]:
    match = _ATTRIBUTE_RES[key].search(source)
    if not match:
        return None
    return html.unescape(match.group(1))


def decode(document: str, now: Optional[datetime] = None) -> tuple[MetadataEnvelope, str]:
    """Extract envelope metadata and return it with the marker removed.

    Never fails: each attribute is looked up on its own and missing ones fall
    back to ``UNTITLED``, the decode time and ``UNKNOWN_URL``.
    """
    marker = _MARKER_RE.search(document)
    source = marker.group(0) if marker else document

    title = _lookup("title", source)
    published_at = _lookup("pubdate", source)
    source_url = _lookup("url", source)
    cover_url = _lookup("cover", source) or None

    meta = MetadataEnvelope(
        title=title if title is not None else UNTITLED,
        published_at=published_at if published_at is not None else utc_now_iso(now),
        source_url=source_url if source_url is not None else UNKNOWN_URL,
        cover_url=cover_url,
    )
    stripped = _MARKER_RE.sub("", document, count=1) if marker else document
    return meta, stripped
