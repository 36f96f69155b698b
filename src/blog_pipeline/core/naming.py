"""Object naming conventions shared by all stages."""

import re
import time
from typing import Callable, Optional

from slugify import slugify

from blog_pipeline.core.entities import TranslatedName

RAW_HTML_AREA = "raw-html"
LEDGER_NAME = "processed_rss_items.json"
MAX_SLUG_LENGTH = 50

TRANSLATED_SUFFIX = "_translations.html"

_TRANSLATED_RE = re.compile(
    r"(?:.*/)?(.*)_([a-z]{2,3}(?:-[a-zA-Z]{2,4})?)_translations\.html$"
)


class MonotonicMillis:
    """Millisecond clock that never returns the same value twice."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> int:
        now = int(self._clock() * 1000)
        self._last = max(now, self._last + 1)
        return self._last


def filename_slug(title: str) -> str:
    """Reduce a title to ASCII alphanumerics and underscores, bounded in length."""
    return re.sub(r"[^a-zA-Z0-9]", "_", title)[:MAX_SLUG_LENGTH]


def raw_html_path(title: str, discriminator: int) -> str:
    return f"{RAW_HTML_AREA}/{filename_slug(title)}-{discriminator}.html"


def is_raw_html_path(name: str) -> bool:
    """Check that ``name`` is a staged raw HTML document (not the ledger)."""
    return name.startswith(f"{RAW_HTML_AREA}/") and name.endswith(".html")


def translated_output_prefix(raw_bucket: str) -> str:
    """Prefix the translation service puts in front of documents from ``raw_bucket``.

    Translated outputs are named after the full input path with ``/`` replaced
    by ``_``, e.g. ``<bucket>_raw-html_<slug>-<ts>_es_translations.html``.
    """
    return f"{raw_bucket}_{RAW_HTML_AREA}_"


def translated_name(base_name: str, language: str) -> str:
    return f"{base_name}_{language}{TRANSLATED_SUFFIX}"


def parse_translated_name(path: str, legacy_prefix: str = "") -> Optional[TranslatedName]:
    """Recover the original document name and language from a translated path.

    Returns None for any path that does not look like
    ``<anything>/<base>_<lang>_translations.html``.
    """
    match = _TRANSLATED_RE.match(path)
    if not match:
        return None

    base_name, language = match.group(1), match.group(2)
    if legacy_prefix:
        base_name = base_name.removeprefix(legacy_prefix)
    if not base_name:
        return None
    return TranslatedName(base_name=base_name, language=language)


def markdown_path(name: TranslatedName) -> str:
    return f"{name.language}/{name.base_name}.md"


def json_path(name: TranslatedName, created_at_ms: int) -> str:
    return f"{name.language}/{created_at_ms}/{name.base_name}.json"


def content_slug(title: str) -> str:
    """Lowercase, URL-safe slug used by the content store."""
    return slugify(title, lowercase=True)
