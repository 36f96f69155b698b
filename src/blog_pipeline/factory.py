"""Build stage services from settings."""

from blog_pipeline.adapters.render import MarkdownConverter
from blog_pipeline.adapters.sources import RSSFeedSource
from blog_pipeline.adapters.storage import GCSBlobStore, LocalBlobStore
from blog_pipeline.adapters.translation import CloudTranslator
from blog_pipeline.config import Settings
from blog_pipeline.core import BlobStore, ProcessedItemsLedger
from blog_pipeline.use_cases import (
    IngestService,
    JsonRenderService,
    MarkdownRenderService,
    TranslateService,
)


def build_store(settings: Settings) -> BlobStore:
    backend = settings.storage.backend
    if backend == "gcs":
        return GCSBlobStore()
    if backend == "local":
        return LocalBlobStore(settings.storage.local_path)
    raise ValueError(f"Unknown storage backend: {backend}")


def build_ledger(settings: Settings, store: BlobStore) -> ProcessedItemsLedger:
    return ProcessedItemsLedger(store, settings.raw_html_bucket)


def build_ingest_service(settings: Settings, store: BlobStore) -> IngestService:
    return IngestService(
        feed_source=RSSFeedSource(settings.rss_feed_url, timeout=settings.feed.timeout),
        store=store,
        ledger=build_ledger(settings, store),
        raw_bucket=settings.raw_html_bucket,
    )


def build_translate_service(settings: Settings) -> TranslateService:
    return TranslateService(
        translator=CloudTranslator(settings.project_id, settings.translation.location),
        raw_bucket=settings.raw_html_bucket,
        translated_bucket=settings.translated_html_bucket,
        target_languages=settings.translation.target_languages,
        source_language=settings.translation.source_language,
    )


def build_markdown_service(settings: Settings, store: BlobStore) -> MarkdownRenderService:
    return MarkdownRenderService(
        store=store,
        converter=MarkdownConverter(),
        translated_bucket=settings.translated_html_bucket,
        markdown_bucket=settings.markdown_bucket,
        legacy_prefix=settings.legacy_name_prefix,
    )


def build_json_service(settings: Settings, store: BlobStore) -> JsonRenderService:
    return JsonRenderService(
        store=store,
        translated_bucket=settings.translated_html_bucket,
        content_bucket=settings.content_bucket,
        legacy_prefix=settings.legacy_name_prefix,
    )
