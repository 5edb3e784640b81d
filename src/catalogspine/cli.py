"""CLI entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from catalogspine.adapter.opds import OPDSFeedAdapter, parse_feed
from catalogspine.core.checkpoint import Checkpoint, FileCheckpointStore
from catalogspine.core.config import get_settings
from catalogspine.core.exceptions import CatalogSpineError
from catalogspine.core.loader import CatalogLoader
from catalogspine.dialect.opds import OPDSDialect
from catalogspine.http.client import HttpClient
from catalogspine.ingest.driver import FeedIngestion, RunConfig
from catalogspine.ingest.interrupt import InterruptPolicy
from catalogspine.models.items import UrlType
from catalogspine.protocols.listener import CollectingListener

app = typer.Typer(
    name="catalogspine",
    help="Resumable OPDS catalog ingestion",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _item_table(title: str, listener: CollectingListener) -> Table:
    table = Table(title=title)
    table.add_column("Kind")
    table.add_column("Title")
    table.add_column("Target")
    for item in listener.items:
        target = ""
        if item.kind == "book":
            target = ", ".join(sorted(item.book)) if isinstance(item.book, dict) else ""
        elif item.kind != "discarded":
            urls = item.urls
            target = urls.get(UrlType.CATALOG) or urls.get(UrlType.HTML_PAGE) or ""
        table.add_row(item.kind, getattr(item, "title", ""), target)
    return table


@app.command()
def version() -> None:
    """Show version."""
    from catalogspine import __version__

    console.print(f"catalogspine {__version__}")


@app.command()
def classify(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="OPDS page on disk"),
    base_url: str = typer.Option(..., "--base-url", help="URL the page was fetched from"),
    name: str = typer.Option("local", "--name", help="Catalog name"),
) -> None:
    """Classify the entries of a single OPDS page."""
    settings = get_settings()
    _configure_logging(settings.log_level)
    listener = CollectingListener()
    config = RunConfig(dialect=OPDSDialect(name), listener=listener)
    try:
        document = parse_feed(path.read_bytes(), source=str(path))
    except CatalogSpineError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    result = FeedIngestion(base_url, config, Checkpoint(catalog_id=name)).ingest(document)
    console.print(_item_table(document.title or str(path), listener))
    console.print(f"Next page: {result.next_url or '-'}")


@app.command()
def load(
    url: str = typer.Argument(..., help="Root URL of the catalog"),
    catalog_id: str = typer.Option(..., "--catalog-id", help="Checkpoint key"),
    checkpoint_dir: Path | None = typer.Option(None, "--checkpoint-dir"),
) -> None:
    """Load a remote catalog, resuming from its checkpoint."""
    settings = get_settings()
    _configure_logging(settings.log_level)
    listener = CollectingListener()
    config = RunConfig(
        dialect=OPDSDialect(catalog_id),
        listener=listener,
        policy=InterruptPolicy(settings.noninterruptable_remainder),
    )
    store = FileCheckpointStore(checkpoint_dir or settings.checkpoint_dir)

    async def run():
        async with HttpClient(
            user_agent=settings.user_agent,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        ) as client:
            loader = CatalogLoader(OPDSFeedAdapter(client), store, config, settings)
            return await loader.load(catalog_id, url)

    try:
        result = asyncio.run(run())
    except CatalogSpineError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(_item_table(catalog_id, listener))
    console.print(
        f"[bold]{result.pages}[/bold] pages, [bold]{result.items}[/bold] items; "
        f"resume: {result.checkpoint.resume_uri or '-'}"
    )
    if result.resume_failed:
        console.print("[yellow]Resume point not found; pagination stopped[/yellow]")


if __name__ == "__main__":
    app()
