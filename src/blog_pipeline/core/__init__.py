"""Core domain layer."""

from blog_pipeline.core.entities import (
    FeedItem,
    MetadataEnvelope,
    ObjectEvent,
    ProcessedSet,
    StageResult,
    StageStatus,
    TranslatedName,
)
from blog_pipeline.core.errors import BlobNotFoundError, InvalidEventError, PipelineError
from blog_pipeline.core.interfaces import BlobStore, FeedSource, HtmlConverter, Translator
from blog_pipeline.core.ledger import ProcessedItemsLedger

__all__ = [
    "FeedItem",
    "MetadataEnvelope",
    "ObjectEvent",
    "ProcessedSet",
    "StageResult",
    "StageStatus",
    "TranslatedName",
    "PipelineError",
    "BlobNotFoundError",
    "InvalidEventError",
    "FeedSource",
    "BlobStore",
    "Translator",
    "HtmlConverter",
    "ProcessedItemsLedger",
]
