"""Shared test fixtures."""

from typing import Callable, Optional, Union

import pytest

from blog_pipeline.core import BlobNotFoundError, BlobStore


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store that records every call."""

    def __init__(self, fail_on: Optional[Callable[[str], bool]] = None) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.content_types: dict[tuple[str, str], str] = {}
        self.uploads: list[tuple[str, str]] = []
        self.downloads: list[tuple[str, str]] = []
        self.fail_on = fail_on

    async def download(self, bucket: str, name: str) -> bytes:
        self.downloads.append((bucket, name))
        if (bucket, name) not in self.objects:
            raise BlobNotFoundError(bucket, name)
        return self.objects[(bucket, name)]

    async def upload(
        self, bucket: str, name: str, data: Union[bytes, str], content_type: str
    ) -> None:
        if self.fail_on and self.fail_on(name):
            raise RuntimeError(f"upload rejected: {name}")
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.objects[(bucket, name)] = data
        self.content_types[(bucket, name)] = content_type
        self.uploads.append((bucket, name))

    def put(self, bucket: str, name: str, text: str) -> None:
        self.objects[(bucket, name)] = text.encode("utf-8")

    def text(self, bucket: str, name: str) -> str:
        return self.objects[(bucket, name)].decode("utf-8")


@pytest.fixture
def store() -> InMemoryBlobStore:
    return InMemoryBlobStore()
