"""CLI entry point for running pipeline stages locally."""

import asyncio
from pathlib import Path

import typer

from blog_pipeline import factory
from blog_pipeline.config import Settings, get_settings
from blog_pipeline.core import ObjectEvent, StageResult
from blog_pipeline.logging_setup import setup_logging

app = typer.Typer(help="Blog content pipeline stages.", no_args_is_help=True)


class State:
    settings: Settings


state = State()


@app.callback()
def main(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
) -> None:
    """Load settings shared by all commands."""
    setup_logging(debug)
    state.settings = get_settings(config)


def _report(result: StageResult) -> None:
    print(f"[{result.status.value}] {result.message}")
    for path in result.written:
        print(f"  └─ {path}")


@app.command()
def ingest() -> None:
    """Fetch the RSS feed and stage new items as raw HTML."""
    settings = state.settings
    service = factory.build_ingest_service(settings, factory.build_store(settings))
    _report(asyncio.run(service.run()))


@app.command()
def translate(bucket: str, name: str) -> None:
    """Translate one raw HTML object, as if it had just been created."""
    service = factory.build_translate_service(state.settings)
    _report(asyncio.run(service.handle(ObjectEvent(bucket=bucket, name=name))))


@app.command("render-markdown")
def render_markdown(bucket: str, name: str) -> None:
    """Render one translated object to Markdown."""
    settings = state.settings
    service = factory.build_markdown_service(settings, factory.build_store(settings))
    _report(asyncio.run(service.handle(ObjectEvent(bucket=bucket, name=name))))


@app.command("render-json")
def render_json(bucket: str, name: str) -> None:
    """Render one translated object to a JSON content record."""
    settings = state.settings
    service = factory.build_json_service(settings, factory.build_store(settings))
    _report(asyncio.run(service.handle(ObjectEvent(bucket=bucket, name=name))))


@app.command()
def ledger(limit: int = typer.Option(10, help="How many recent links to show")) -> None:
    """Show the processed items ledger."""
    settings = state.settings
    processed = asyncio.run(
        factory.build_ledger(settings, factory.build_store(settings)).load()
    )

    print(f"Processed items: {len(processed)}")
    for link in processed.to_list()[-limit:]:
        print(f"  • {link}")


if __name__ == "__main__":
    app()
