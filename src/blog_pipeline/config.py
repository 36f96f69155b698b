"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from blog_pipeline.core.naming import translated_output_prefix


@dataclass
class BucketsConfig:
    """Bucket names for each area of the pipeline."""
    raw_html: str = "your-raw-html-bucket-name"
    translated_html: Optional[str] = None
    markdown: Optional[str] = None
    content: Optional[str] = None


@dataclass
class FeedConfig:
    """RSS feed settings."""
    url: str = "https://www.nasa.gov/news-release/feed/"
    timeout: float = 30.0


@dataclass
class TranslationConfig:
    """Cloud Translation settings."""
    project_id: Optional[str] = None
    location: str = "global"
    source_language: str = "en"
    target_languages: list[str] = field(default_factory=lambda: ["es", "pt-BR"])
    legacy_name_prefix: Optional[str] = None


@dataclass
class StorageConfig:
    """Blob store backend settings."""
    backend: str = "gcs"
    local_path: Path = Path("buckets")


@dataclass
class Settings:
    """Application settings."""

    buckets: BucketsConfig = field(default_factory=BucketsConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @property
    def rss_feed_url(self) -> str:
        return self.feed.url

    @property
    def raw_html_bucket(self) -> str:
        return self.buckets.raw_html

    @property
    def translated_html_bucket(self) -> str:
        return _require(self.buckets.translated_html, "TRANSLATED_HTML_BUCKET_NAME")

    @property
    def markdown_bucket(self) -> str:
        return _require(self.buckets.markdown, "MARKDOWN_BUCKET_NAME")

    @property
    def content_bucket(self) -> str:
        return _require(self.buckets.content, "CONTENT_BUCKET_NAME")

    @property
    def project_id(self) -> str:
        return _require(self.translation.project_id, "GCP_PROJECT")

    @property
    def legacy_name_prefix(self) -> str:
        """Prefix stripped from translated names to recover the raw document name."""
        if self.translation.legacy_name_prefix is not None:
            return self.translation.legacy_name_prefix
        return translated_output_prefix(self.buckets.raw_html)


def _require(value: Optional[str], env_var: str) -> str:
    if not value:
        raise ValueError(f"{env_var} is not configured")
    return value


# Environment variable -> (section, attribute)
ENV_OVERRIDES = {
    "RSS_FEED_URL": ("feed", "url"),
    "RAW_HTML_BUCKET_NAME": ("buckets", "raw_html"),
    "TRANSLATED_HTML_BUCKET_NAME": ("buckets", "translated_html"),
    "MARKDOWN_BUCKET_NAME": ("buckets", "markdown"),
    "CONTENT_BUCKET_NAME": ("buckets", "content"),
    "GCP_PROJECT": ("translation", "project_id"),
    "TRANSLATION_LOCATION": ("translation", "location"),
    "LEGACY_NAME_PREFIX": ("translation", "legacy_name_prefix"),
    "STORAGE_BACKEND": ("storage", "backend"),
    "LOCAL_STORAGE_PATH": ("storage", "local_path"),
}


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    settings = Settings()

    # Apply YAML config
    for section_name in ("buckets", "feed", "translation", "storage"):
        section = getattr(settings, section_name)
        for key, value in (config.get(section_name) or {}).items():
            if not hasattr(section, key):
                raise ValueError(f"Unknown setting {section_name}.{key}")
            setattr(section, key, value)

    # Environment wins over YAML
    for env_var, (section_name, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            setattr(getattr(settings, section_name), key, value)

    settings.storage.local_path = Path(settings.storage.local_path)
    settings.feed.timeout = float(settings.feed.timeout)

    return settings
