"""Command-line interface for notion-export."""

from pathlib import Path
from typing import Annotated

import requests
import typer
from loguru import logger

from notion_export.api import NotionApi
from notion_export.config import DEFAULT_OUTPUT_DIR, TOKEN_ENV_VAR
from notion_export.errors import ExportError
from notion_export.exporter import Exporter
from notion_export.fetcher import HttpFetcher
from notion_export.logging_config import configure_logging
from notion_export.writer import FileWriter

USAGE = "Usage: notion-export <page url or id> [output dir]"

app = typer.Typer(help="Export a Notion page and all its sub-pages to Markdown.")


@app.command()
def main(
    root: Annotated[
        str | None,
        typer.Argument(help="URL or id of the page to export", show_default=False),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Argument(help="Directory to write the export to"),
    ] = Path(DEFAULT_OUTPUT_DIR),
    token: Annotated[
        str | None,
        typer.Option("--token", envvar=TOKEN_ENV_VAR, help="Notion integration token"),
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write anything"),
) -> None:
    """Export ROOT and every page below it into OUTPUT_DIR."""
    configure_logging(verbose=verbose)

    if not token:
        logger.error("Set {} to your Notion integration token", TOKEN_ENV_VAR)
        raise typer.Exit(1)
    if not root:
        logger.error(USAGE)
        raise typer.Exit(1)

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    try:
        writer = FileWriter(output_dir, dry_run=dry_run)
        exporter = Exporter(NotionApi(token), writer, HttpFetcher(), token=token)
        exporter.export(root)
    except (ExportError, requests.RequestException) as e:
        logger.error("Export failed: {}", e)
        raise typer.Exit(1) from e

    typer.echo(f"✔ Export finished: {writer.root}")
