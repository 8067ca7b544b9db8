"""
Command-line interface for popindex.

Example Usage:
    Build (or rebuild) the index:
        $ pop --index ~/data --reindex

    Search it:
        $ pop --name report --ext pdf --size ">1MB" --sort size --reverse
        $ pop --regex "^IMG_\\d{4}\\.jpg$" --path ~/photos --limit 5000
        $ pop --type dir --lmd 2024-01-01

    Maintenance:
        $ pop --clear
        $ pop --vacuum

The index location comes from --db, then POPINDEX_DB, then the user data
directory.
"""

import logging
import time
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from popindex_core import __version__
from popindex_core.api import PopIndex
from popindex_core.config import PopIndexConfig
from popindex_core.domain.enums import EntryKind, SortKey
from popindex_core.domain.models import SearchCriteria
from popindex_core.errors import PopIndexError

from .formatting import render_results, render_summary

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--index", "index_path", metavar="PATH", help="Index a directory or drive")
@click.option("--reindex", is_flag=True, default=False, help="Clear the index before indexing (requires --index)")
@click.option("--clear", is_flag=True, default=False, help="Clear all entries from the index")
@click.option("--vacuum", is_flag=True, default=False, help="Compact the index file")
@click.option("--name", help="Partial or full name match")
@click.option("--regex", help="Regular expression on the name (applied after --limit)")
@click.option("--ext", help="File extension filter")
@click.option("--size", help="Size filter: >10MB, <500KB or an exact byte count")
@click.option("--lmd", help="Modified on or after this date (YYYY-MM-DD)")
@click.option("--type", "kind", type=click.Choice([k.value for k in EntryKind]), help="Files or directories only")
@click.option("--path", "path_prefix", help="Limit search to paths starting with this prefix")
@click.option("--sort", type=click.Choice([k.value for k in SortKey]), help="Sort results")
@click.option("--reverse", is_flag=True, default=False, help="Reverse sort order")
@click.option("--limit", type=click.IntRange(min=0), help="Maximum number of results")
@click.option("--case-sensitive", is_flag=True, default=False, help="Disable case-insensitive matching")
@click.option("--db", "db_path", envvar="POPINDEX_DB", metavar="PATH", help="Index file location")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log progress to stderr")
@click.version_option(__version__, prog_name="pop")
def cli(
    index_path: Optional[str],
    reindex: bool,
    clear: bool,
    vacuum: bool,
    name: Optional[str],
    regex: Optional[str],
    ext: Optional[str],
    size: Optional[str],
    lmd: Optional[str],
    kind: Optional[str],
    path_prefix: Optional[str],
    sort: Optional[str],
    reverse: bool,
    limit: Optional[int],
    case_sensitive: bool,
    db_path: Optional[str],
    verbose: bool,
) -> None:
    """pop - fast file indexing and search"""
    _setup_logging(verbose)

    if reindex and not index_path:
        raise click.UsageError("--reindex requires --index <path>")

    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        config = PopIndexConfig.from_env(db_path=db_path)
    except ValueError as e:
        raise click.UsageError(str(e))

    try:
        with PopIndex(config) as pop:
            if clear or vacuum:
                if clear:
                    console.print(Text("Clearing index...", style="bold red"))
                    pop.clear_index()
                    console.print("Index cleared successfully.")
                if vacuum:
                    pop.vacuum()
                    console.print("Index compacted.")
                return

            if index_path:
                console.print(Text.assemble(("Indexing ", "bold blue"), (index_path, "yellow")), soft_wrap=True)
                progress = pop.index(index_path, reindex=reindex)
                console.print(Text.assemble(
                    ("Success!", "bold green"),
                    f" Indexed {progress.entries_found} entries in ",
                    (f"{progress.elapsed_seconds:.2f}s", "cyan"),
                ))
                if progress.errors:
                    console.print(Text(f"Skipped {progress.errors} unreadable entries", style="yellow"))
                return

            criteria = SearchCriteria(
                name=name,
                regex=regex,
                extension=ext,
                path=path_prefix,
                kind=kind,
                size=size,
                modified_after=lmd,
                sort=sort,
                reverse=reverse,
                limit=limit,
                case_sensitive=case_sensitive,
            )
            started = time.perf_counter()
            results = pop.search(criteria)
            elapsed = time.perf_counter() - started

            render_results(console, results, needle=name)
            render_summary(console, pop.summarize(results), elapsed)
    except PopIndexError as e:
        err_console.print(Text.assemble(("Error: ", "bold red"), str(e)), soft_wrap=True)
        raise SystemExit(1)


def main() -> None:
    """Console-script entry point."""
    cli()
