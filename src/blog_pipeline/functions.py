"""Cloud Functions entry points.

Deploy each function with ``--entry-point`` set to one of ``ingest_http``,
``translate_event``, ``render_markdown_event`` or ``render_json_event``.
Clients are created once per process; services are rebuilt per invocation.
"""

import asyncio
import logging
from functools import lru_cache

import functions_framework

from blog_pipeline import factory
from blog_pipeline.config import Settings, get_settings
from blog_pipeline.core import BlobStore, ObjectEvent
from blog_pipeline.logging_setup import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def _store() -> BlobStore:
    return factory.build_store(_settings())


@functions_framework.http
def ingest_http(request):
    """Ingest new RSS items. Answers 200 with a summary or 500 on failure."""
    try:
        service = factory.build_ingest_service(_settings(), _store())
        result = asyncio.run(service.run())
    except Exception as e:
        logger.exception("Error digesting RSS feed")
        return f"Error processing RSS feed: {e}", 500

    return result.message, 200


@functions_framework.cloud_event
def translate_event(cloud_event) -> None:
    """Translate a raw HTML document when it lands in the raw bucket."""
    event = ObjectEvent.from_payload(cloud_event.data)
    service = factory.build_translate_service(_settings())
    asyncio.run(service.handle(event))


@functions_framework.cloud_event
def render_markdown_event(cloud_event) -> None:
    """Render a translated document to Markdown."""
    event = ObjectEvent.from_payload(cloud_event.data)
    service = factory.build_markdown_service(_settings(), _store())
    asyncio.run(service.handle(event))


@functions_framework.cloud_event
def render_json_event(cloud_event) -> None:
    """Render a translated document to a JSON content record."""
    event = ObjectEvent.from_payload(cloud_event.data)
    service = factory.build_json_service(_settings(), _store())
    asyncio.run(service.handle(event))
