"""Tests for Cloud Functions entry points."""

from unittest.mock import AsyncMock, Mock

import pytest

from blog_pipeline import functions
from blog_pipeline.config import Settings
from blog_pipeline.core import (
    InvalidEventError,
    ObjectEvent,
    PipelineError,
    StageResult,
    StageStatus,
)


@pytest.fixture
def wiring(monkeypatch):
    """Replace settings and store lookups with fixed objects."""
    settings = Settings()
    store = Mock()
    monkeypatch.setattr(functions, "_settings", lambda: settings)
    monkeypatch.setattr(functions, "_store", lambda: store)
    return settings, store


def _service(method: str, **kwargs) -> Mock:
    service = Mock()
    setattr(service, method, AsyncMock(**kwargs))
    return service


def test_ingest_http_success(wiring, monkeypatch) -> None:
    """Test the 200 response carries the stage summary."""
    settings, store = wiring
    service = _service(
        "run",
        return_value=StageResult(
            StageStatus.COMPLETED, "New RSS feed digestion completed successfully."
        ),
    )
    build = Mock(return_value=service)
    monkeypatch.setattr(functions.factory, "build_ingest_service", build)

    body, status = functions.ingest_http(Mock())

    assert status == 200
    assert body == "New RSS feed digestion completed successfully."
    build.assert_called_once_with(settings, store)


def test_ingest_http_nothing_new(wiring, monkeypatch) -> None:
    """Test that an idle run is still a success."""
    service = _service(
        "run", return_value=StageResult(StageStatus.NO_NEW_ITEMS, "No new RSS items to process.")
    )
    monkeypatch.setattr(functions.factory, "build_ingest_service", Mock(return_value=service))

    assert functions.ingest_http(Mock()) == ("No new RSS items to process.", 200)


def test_ingest_http_failure(wiring, monkeypatch) -> None:
    """Test that failures become a 500 with the error text."""
    service = _service("run", side_effect=PipelineError("feed unavailable"))
    monkeypatch.setattr(functions.factory, "build_ingest_service", Mock(return_value=service))

    body, status = functions.ingest_http(Mock())

    assert status == 500
    assert body == "Error processing RSS feed: feed unavailable"


def test_ingest_http_configuration_failure(wiring, monkeypatch) -> None:
    """Test that wiring errors are reported the same way."""
    monkeypatch.setattr(
        functions.factory,
        "build_ingest_service",
        Mock(side_effect=ValueError("RAW_HTML_BUCKET_NAME is not configured")),
    )

    body, status = functions.ingest_http(Mock())

    assert status == 500
    assert "RAW_HTML_BUCKET_NAME" in body


@pytest.mark.parametrize(
    "entry_point, builder, uses_store",
    [
        ("translate_event", "build_translate_service", False),
        ("render_markdown_event", "build_markdown_service", True),
        ("render_json_event", "build_json_service", True),
    ],
)
def test_event_handlers(wiring, monkeypatch, entry_point, builder, uses_store) -> None:
    """Test that storage events reach the stage service."""
    settings, store = wiring
    service = _service(
        "handle", return_value=StageResult(StageStatus.COMPLETED, "done")
    )
    build = Mock(return_value=service)
    monkeypatch.setattr(functions.factory, builder, build)

    cloud_event = Mock(data={"bucket": "b", "name": "raw-html/x-1.html", "contentType": "text/html"})
    getattr(functions, entry_point)(cloud_event)

    service.handle.assert_awaited_once_with(
        ObjectEvent(bucket="b", name="raw-html/x-1.html", content_type="text/html")
    )
    if uses_store:
        build.assert_called_once_with(settings, store)
    else:
        build.assert_called_once_with(settings)


def test_event_handler_invalid_payload(wiring, monkeypatch) -> None:
    """Test that an empty payload is rejected before any work."""
    build = Mock()
    monkeypatch.setattr(functions.factory, "build_translate_service", build)

    with pytest.raises(InvalidEventError):
        functions.translate_event(Mock(data=None))

    build.assert_not_called()


def test_event_handler_failure_propagates(wiring, monkeypatch) -> None:
    """Test that stage failures surface so the platform can retry."""
    service = _service("handle", side_effect=PipelineError("Error rendering Markdown for x"))
    monkeypatch.setattr(functions.factory, "build_markdown_service", Mock(return_value=service))

    with pytest.raises(PipelineError, match="Error rendering Markdown"):
        functions.render_markdown_event(Mock(data={"bucket": "t", "name": "x"}))
