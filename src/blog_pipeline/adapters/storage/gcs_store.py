"""Google Cloud Storage adapter."""

import asyncio
import logging
from typing import Optional, Union

from google.api_core.exceptions import NotFound
from google.cloud import storage

from blog_pipeline.core import BlobNotFoundError, BlobStore

logger = logging.getLogger(__name__)


class GCSBlobStore(BlobStore):
    """Blob store backed by Cloud Storage buckets.

    The storage client is synchronous, so every call runs in a worker thread.
    """

    def __init__(self, client: Optional[storage.Client] = None) -> None:
        self._client = client

    @property
    def client(self) -> storage.Client:
        if self._client is None:
            self._client = storage.Client()
        return self._client

    async def download(self, bucket: str, name: str) -> bytes:
        blob = self.client.bucket(bucket).blob(name)
        try:
            return await asyncio.to_thread(blob.download_as_bytes)
        except NotFound as e:
            raise BlobNotFoundError(bucket, name) from e

    async def upload(
        self, bucket: str, name: str, data: Union[bytes, str], content_type: str
    ) -> None:
        blob = self.client.bucket(bucket).blob(name)
        await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)
        logger.info("Uploaded %s to %s", name, bucket)
