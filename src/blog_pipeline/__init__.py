"""Blog content pipeline: RSS ingestion, translation and rendering stages."""

__version__ = "0.1.0"
