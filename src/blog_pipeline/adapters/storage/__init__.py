"""Blob store adapters."""

from blog_pipeline.adapters.storage.gcs_store import GCSBlobStore
from blog_pipeline.adapters.storage.local_store import LocalBlobStore

__all__ = ["GCSBlobStore", "LocalBlobStore"]
