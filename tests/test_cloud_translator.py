"""Tests for the Cloud Translation adapter."""

from unittest.mock import AsyncMock, Mock

import pytest

from blog_pipeline.adapters.translation import CloudTranslator


@pytest.mark.asyncio
async def test_batch_translate_request() -> None:
    """Test the batch request and waiting for the operation."""
    operation = Mock()
    operation.operation.name = "projects/p/locations/global/operations/123"
    operation.result = AsyncMock(return_value=Mock(translated_characters=120, failed_characters=0))

    client = Mock()
    client.batch_translate_text = AsyncMock(return_value=operation)

    translator = CloudTranslator("my-project", client=client)
    name = await translator.batch_translate(
        "gs://raw/raw-html/a-1.html",
        "gs://translated/42/",
        source_language="en",
        target_languages=["es", "pt-BR"],
    )

    assert name == "projects/p/locations/global/operations/123"
    operation.result.assert_awaited_once()

    request = client.batch_translate_text.call_args.kwargs["request"]
    assert request == {
        "parent": "projects/my-project/locations/global",
        "source_language_code": "en",
        "target_language_codes": ["es", "pt-BR"],
        "input_configs": [
            {
                "gcs_source": {"input_uri": "gs://raw/raw-html/a-1.html"},
                "mime_type": "text/html",
            }
        ],
        "output_config": {
            "gcs_destination": {"output_uri_prefix": "gs://translated/42/"},
        },
    }


@pytest.mark.asyncio
async def test_batch_translate_error_propagates() -> None:
    """Test that API errors reach the caller."""
    client = Mock()
    client.batch_translate_text = AsyncMock(side_effect=RuntimeError("permission denied"))

    translator = CloudTranslator("my-project", location="us-central1", client=client)

    with pytest.raises(RuntimeError, match="permission denied"):
        await translator.batch_translate("gs://a/b", "gs://c/", "en", ["es"])
