"""Translation adapters."""

from blog_pipeline.adapters.translation.cloud_translator import CloudTranslator

__all__ = ["CloudTranslator"]
