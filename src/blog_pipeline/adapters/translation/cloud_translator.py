"""Cloud Translation batch client."""

import logging
from typing import Optional

from google.cloud import translate_v3

from blog_pipeline.core import Translator

logger = logging.getLogger(__name__)


class CloudTranslator(Translator):
    """Run Cloud Translation v3 batch jobs between storage buckets."""

    def __init__(
        self,
        project_id: str,
        location: str = "global",
        client: Optional[translate_v3.TranslationServiceAsyncClient] = None,
    ) -> None:
        self.project_id = project_id
        self.location = location
        self._client = client

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}"

    async def batch_translate(
        self,
        input_uri: str,
        output_uri_prefix: str,
        source_language: str,
        target_languages: list[str],
        mime_type: str = "text/html",
    ) -> str:
        if self._client is None:
            self._client = translate_v3.TranslationServiceAsyncClient()

        request = {
            "parent": self.parent,
            "source_language_code": source_language,
            "target_language_codes": target_languages,
            "input_configs": [
                {
                    "gcs_source": {"input_uri": input_uri},
                    "mime_type": mime_type,
                }
            ],
            "output_config": {
                "gcs_destination": {"output_uri_prefix": output_uri_prefix},
            },
        }

        operation = await self._client.batch_translate_text(request=request)
        operation_name = operation.operation.name
        logger.info("Batch translation operation started: %s", operation_name)

        response = await operation.result()
        logger.info(
            "Batch translation operation finished: %d characters translated, %d failed",
            response.translated_characters,
            response.failed_characters,
        )
        return operation_name
