"""Pipeline stage use cases."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import yaml

from blog_pipeline.core import (
    BlobStore,
    FeedItem,
    FeedSource,
    HtmlConverter,
    MetadataEnvelope,
    ObjectEvent,
    PipelineError,
    ProcessedItemsLedger,
    StageResult,
    StageStatus,
    TranslatedName,
    Translator,
)
from blog_pipeline.core import envelope, naming

logger = logging.getLogger(__name__)


class IngestService:
    """Stage RSS items that were not ingested before as raw HTML."""

    def __init__(
        self,
        feed_source: FeedSource,
        store: BlobStore,
        ledger: ProcessedItemsLedger,
        raw_bucket: str,
        discriminator: Optional[Callable[[], int]] = None,
    ) -> None:
        self.feed_source = feed_source
        self.store = store
        self.ledger = ledger
        self.raw_bucket = raw_bucket
        self.discriminator = discriminator or naming.MonotonicMillis()

    async def run(self) -> StageResult:
        """Fetch the feed, publish new items and record them in the ledger.

        Item uploads run concurrently. The ledger is saved once, only after
        every upload succeeded; if any upload fails the whole run fails and
        already uploaded items will be ingested again next time.
        """
        logger.info("Starting RSS feed digestion process...")

        items = await self.feed_source.fetch_items()
        if not items:
            logger.info("No items found in the RSS feed.")
            return StageResult(StageStatus.NO_ITEMS, "No RSS items to process.")

        processed = await self.ledger.load()
        new_items = self.ledger.diff_new(items, processed)

        if not new_items:
            logger.info("No new RSS items to process.")
            return StageResult(StageStatus.NO_NEW_ITEMS, "No new RSS items to process.")

        for item in new_items:
            logger.info("Found new item: %s (%s)", item.title, item.link)
        logger.info("Found %d new items to process.", len(new_items))

        results = await asyncio.gather(
            *(self._publish(item) for item in new_items),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for failure in failures:
                logger.error("Failed to upload item: %s", failure)
            raise PipelineError(
                f"{len(failures)} of {len(new_items)} items failed to upload: {failures[0]}"
            ) from failures[0]

        await self.ledger.save(processed.union(item.link for item in new_items))

        logger.info("All new RSS items processed and uploaded to %s.", self.raw_bucket)
        return StageResult(
            StageStatus.COMPLETED,
            "New RSS feed digestion completed successfully.",
            written=list(results),
        )

    async def _publish(self, item: FeedItem) -> str:
        """Upload one item as an HTML document carrying its metadata."""
        title = item.title or "No Title"
        meta = MetadataEnvelope(
            title=title,
            published_at=item.published_at or envelope.utc_now_iso(),
            source_url=item.link,
            cover_url=item.cover_url,
        )
        path = naming.raw_html_path(title, self.discriminator())

        await self.store.upload(
            self.raw_bucket,
            path,
            envelope.wrap(meta, item.body_html),
            content_type="text/html",
        )
        return path


class TranslateService:
    """Hand staged raw HTML to the batch translation service."""

    def __init__(
        self,
        translator: Translator,
        raw_bucket: str,
        translated_bucket: str,
        target_languages: list[str],
        source_language: str = "en",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.translator = translator
        self.raw_bucket = raw_bucket
        self.translated_bucket = translated_bucket
        self.target_languages = target_languages
        self.source_language = source_language
        self.clock = clock or naming.MonotonicMillis()

    async def handle(self, event: ObjectEvent) -> StageResult:
        logger.info("Processing file: %s from bucket: %s", event.name, event.bucket)

        if event.bucket != self.raw_bucket:
            return _skip(f"Ignoring file from unexpected bucket: {event.bucket}")

        if not naming.is_raw_html_path(event.name):
            return _skip(f"Skipping file {event.name}: not a raw HTML document")

        input_uri = f"gs://{event.bucket}/{event.name}"
        output_uri_prefix = f"gs://{self.translated_bucket}/{self.clock()}/"

        try:
            operation = await self.translator.batch_translate(
                input_uri,
                output_uri_prefix,
                source_language=self.source_language,
                target_languages=self.target_languages,
            )
        except Exception as e:
            raise PipelineError(f"Error running batch translation for {event.name}: {e}") from e

        return StageResult(
            StageStatus.COMPLETED,
            f"Translated {input_uri} to {', '.join(self.target_languages)} ({operation})",
            written=[output_uri_prefix],
        )


class TranslatedDocumentService(ABC):
    """Base for stages consuming translated HTML documents."""

    failure_label = "rendering"

    def __init__(self, store: BlobStore, translated_bucket: str, legacy_prefix: str = "") -> None:
        self.store = store
        self.translated_bucket = translated_bucket
        self.legacy_prefix = legacy_prefix

    async def handle(self, event: ObjectEvent) -> StageResult:
        logger.info("Processing file: %s from bucket: %s", event.name, event.bucket)

        if event.bucket != self.translated_bucket:
            return _skip(f"Ignoring file from unexpected bucket: {event.bucket}")

        name = naming.parse_translated_name(event.name, self.legacy_prefix)
        if name is None:
            return _skip(
                f"Skipping file {event.name}: Does not match expected format "
                "'<original_file_name>_[trg]_translations.html'"
            )
        logger.info(
            "Detected language: %s for original file: %s", name.language, name.base_name
        )

        try:
            content = await self.store.download(event.bucket, event.name)
            document = content.decode("utf-8")
            logger.info("HTML content read from %s.", event.name)

            meta, body = envelope.decode(document)
            meta.language = name.language
            logger.info(
                'Extracted metadata: Title="%s", PubDate="%s", URL="%s"',
                meta.title,
                meta.published_at,
                meta.source_url,
            )

            bucket, path = await self._write(name, meta, body)
        except Exception as e:
            raise PipelineError(f"Error {self.failure_label} for {event.name}: {e}") from e

        logger.info("Saved %s to %s", path, bucket)
        return StageResult(StageStatus.COMPLETED, f"Saved {path} to {bucket}", written=[path])

    @abstractmethod
    async def _write(
        self, name: TranslatedName, meta: MetadataEnvelope, body_html: str
    ) -> tuple[str, str]:
        """Render and upload the output. Returns (bucket, path)."""
        pass


class MarkdownRenderService(TranslatedDocumentService):
    """Render translated HTML as Markdown with YAML frontmatter."""

    failure_label = "converting HTML to Markdown"

    def __init__(
        self,
        store: BlobStore,
        converter: HtmlConverter,
        translated_bucket: str,
        markdown_bucket: str,
        legacy_prefix: str = "",
    ) -> None:
        super().__init__(store, translated_bucket, legacy_prefix)
        self.converter = converter
        self.markdown_bucket = markdown_bucket

    async def _write(
        self, name: TranslatedName, meta: MetadataEnvelope, body_html: str
    ) -> tuple[str, str]:
        markdown = self.converter.to_markdown(body_html)
        logger.info("HTML converted to Markdown.")

        path = naming.markdown_path(name)
        await self.store.upload(
            self.markdown_bucket,
            path,
            compose_markdown(meta, markdown),
            content_type="text/markdown",
        )
        return self.markdown_bucket, path


class JsonRenderService(TranslatedDocumentService):
    """Wrap translated HTML into a JSON record for the content store."""

    failure_label = "converting HTML to JSON"

    def __init__(
        self,
        store: BlobStore,
        translated_bucket: str,
        content_bucket: str,
        legacy_prefix: str = "",
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__(store, translated_bucket, legacy_prefix)
        self.content_bucket = content_bucket
        self.clock = clock or naming.MonotonicMillis()

    async def _write(
        self, name: TranslatedName, meta: MetadataEnvelope, body_html: str
    ) -> tuple[str, str]:
        record = compose_json_record(meta, body_html)

        path = naming.json_path(name, self.clock())
        await self.store.upload(
            self.content_bucket,
            path,
            json.dumps(record, ensure_ascii=False),
            content_type="application/json",
        )
        return self.content_bucket, path


def compose_markdown(meta: MetadataEnvelope, markdown: str) -> str:
    """Prefix a Markdown body with a ``---`` delimited YAML frontmatter."""
    frontmatter = {
        "title": meta.title,
        "date": meta.published_at,
        "source_url": meta.source_url,
        "language": meta.language,
    }
    dumped = yaml.dump(frontmatter, allow_unicode=True, default_flow_style=False, sort_keys=False)
    return f"---\n{dumped}---\n\n{markdown}"


def compose_json_record(meta: MetadataEnvelope, content_html: str) -> dict:
    return {
        "title": meta.title,
        "date": meta.published_at,
        "source_url": meta.source_url,
        "language": meta.language,
        "content": content_html,
        "cover": meta.cover_url,
        "slug": naming.content_slug(meta.title),
    }


def _skip(reason: str) -> StageResult:
    logger.info(reason)
    return StageResult(StageStatus.SKIPPED, reason)
