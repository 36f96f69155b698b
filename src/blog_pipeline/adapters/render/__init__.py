"""Rendering adapters."""

from blog_pipeline.adapters.render.markdown_converter import MarkdownConverter

__all__ = ["MarkdownConverter"]
