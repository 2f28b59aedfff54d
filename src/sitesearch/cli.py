"""Command line interface for SiteSearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sitesearch.config import BuildConfig, load_config
from sitesearch.errors import SiteSearchError
from sitesearch.index.indexer import SiteIndexer
from sitesearch.index.search import Searcher
from sitesearch.index.storage import ArtifactStore


console = Console()
app = typer.Typer(help="SiteSearch - build-time full-text search index for docs sites")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _make_config(config_file: Optional[Path], **overrides) -> BuildConfig:
    if config_file is not None:
        return load_config(config_file, **overrides)
    return BuildConfig(**{key: value for key, value in overrides.items() if value is not None})


@app.command()
def build(
    docs_dir: Optional[Path] = typer.Argument(None, help="Root directory of the documentation sources."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output directory for the artifacts"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML build configuration"
    ),
    snippet_chars: Optional[int] = typer.Option(None, help="Snippet length in characters"),
    on_duplicate: Optional[str] = typer.Option(
        None, help="Duplicate slug policy: 'warn' keeps the first document, 'error' aborts"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rebuild the search index and metadata table from a docs tree."""
    _setup_logging(verbose)
    try:
        config = _make_config(
            config_file,
            docs_dir=docs_dir,
            output_dir=out,
            snippet_chars=snippet_chars,
            on_duplicate=on_duplicate,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    indexer = SiteIndexer(config, base_dir=Path.cwd())
    console.print(f"Indexing [bold]{indexer.docs_dir}[/bold]...")
    try:
        stats = indexer.build()
    except SiteSearchError as exc:
        console.print(f"[red]Build failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not stats.indexed:
        console.print("[yellow]No documents found; wrote an empty index.[/yellow]")
    for duplicate in stats.duplicates:
        console.print(
            f"[yellow]Duplicate slug {duplicate.slug}: kept {duplicate.kept}, "
            f"skipped {duplicate.skipped}[/yellow]"
        )
    console.print(
        f"Indexed: {stats.indexed}, skipped: {stats.skipped}, terms: {stats.terms}"
    )
    for path, digest in stats.artifacts.items():
        console.print(f"  {path} [dim]{digest[:12]}[/dim]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    out: Path = typer.Option(BuildConfig().output_dir, "--out", "-o", help="Directory holding the artifacts"),
    top_k: int = typer.Option(10, min=1, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Query previously built artifacts."""
    _setup_logging(verbose)
    config = BuildConfig(output_dir=out)
    store = ArtifactStore(
        config.resolve_output_dir(Path.cwd()),
        index_filename=config.index_filename,
        docs_filename=config.docs_filename,
    )
    if not store.index_path.exists():
        raise typer.BadParameter(f"Search index not found: {store.index_path}")

    try:
        searcher = Searcher.from_store(store)
    except (SiteSearchError, ValueError) as exc:
        console.print(f"[red]Cannot load artifacts:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    try:
        results = searcher.search(query, top_k=top_k)
    except SiteSearchError as exc:
        console.print(f"[red]Search failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Snippet")

    for result in results:
        table.add_row(f"{result.score:.3f}", result.slug, result.title, result.category, result.snippet[:120])

    console.print(table)
