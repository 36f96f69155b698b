"""Filesystem blob store for local runs."""

import logging
from pathlib import Path
from typing import Union

from blog_pipeline.core import BlobNotFoundError, BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """Store each bucket as a directory under ``base_path``."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    def _path(self, bucket: str, name: str) -> Path:
        root = (self.base_path / bucket).resolve()
        path = (root / name).resolve()
        if root not in path.parents:
            raise ValueError(f"Object name escapes bucket: {name}")
        return path

    async def download(self, bucket: str, name: str) -> bytes:
        path = self._path(bucket, name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise BlobNotFoundError(bucket, name) from e

    async def upload(
        self, bucket: str, name: str, data: Union[bytes, str], content_type: str
    ) -> None:
        path = self._path(bucket, name)
        path.parent.mkdir(parents=True, exist_ok=True)

        if isinstance(data, str):
            data = data.encode("utf-8")
        path.write_bytes(data)
        logger.info("Uploaded %s to %s", name, bucket)
