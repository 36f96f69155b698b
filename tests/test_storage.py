"""Tests for blob store adapters."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest
from google.api_core.exceptions import NotFound

from blog_pipeline.adapters.storage import GCSBlobStore, LocalBlobStore
from blog_pipeline.core import BlobNotFoundError


@pytest.mark.asyncio
async def test_local_store_round_trip() -> None:
    """Test writing and reading nested objects."""
    with TemporaryDirectory() as tmpdir:
        store = LocalBlobStore(Path(tmpdir))

        await store.upload("markdown", "es/post.md", "# Hola", content_type="text/markdown")

        assert await store.download("markdown", "es/post.md") == "# Hola".encode("utf-8")
        assert (Path(tmpdir) / "markdown" / "es" / "post.md").exists()


@pytest.mark.asyncio
async def test_local_store_missing_object() -> None:
    """Test that a missing file maps to BlobNotFoundError."""
    with TemporaryDirectory() as tmpdir:
        store = LocalBlobStore(Path(tmpdir))

        with pytest.raises(BlobNotFoundError, match="raw/nope.json"):
            await store.download("raw", "nope.json")


@pytest.mark.asyncio
async def test_local_store_rejects_escaping_names() -> None:
    """Test that object names cannot leave their bucket directory."""
    with TemporaryDirectory() as tmpdir:
        store = LocalBlobStore(Path(tmpdir))

        with pytest.raises(ValueError, match="escapes bucket"):
            await store.upload("raw", "../other/x.html", b"x", content_type="text/html")


def _gcs_store() -> tuple[GCSBlobStore, Mock, Mock]:
    client = Mock()
    blob = Mock()
    client.bucket.return_value.blob.return_value = blob
    return GCSBlobStore(client=client), client, blob


@pytest.mark.asyncio
async def test_gcs_download() -> None:
    """Test downloading through the storage client."""
    store, client, blob = _gcs_store()
    blob.download_as_bytes.return_value = b'["a"]'

    content = await store.download("raw", "processed_rss_items.json")

    assert content == b'["a"]'
    client.bucket.assert_called_once_with("raw")
    client.bucket.return_value.blob.assert_called_once_with("processed_rss_items.json")


@pytest.mark.asyncio
async def test_gcs_download_not_found() -> None:
    """Test that NotFound maps to BlobNotFoundError."""
    store, _, blob = _gcs_store()
    blob.download_as_bytes.side_effect = NotFound("No such object")

    with pytest.raises(BlobNotFoundError):
        await store.download("raw", "processed_rss_items.json")


@pytest.mark.asyncio
async def test_gcs_upload() -> None:
    """Test uploading with a content type."""
    store, _, blob = _gcs_store()

    await store.upload("raw", "raw-html/a-1.html", "<p>a</p>", content_type="text/html")

    blob.upload_from_string.assert_called_once_with("<p>a</p>", content_type="text/html")
