"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from blogstore.config import Settings, load_config
from blogstore.core.emit import write_store
from blogstore.core.errors import ValidationError
from blogstore.core.store import DocumentStore, load


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _load(path: Optional[str], settings: Settings) -> DocumentStore:
    """Load the store from path (or the configured content dir), exiting 1 on any violation."""
    source = path or settings.content_dir
    try:
        return load(source, settings)
    except ValidationError as e:
        _fail(f"Invalid document {e.document}", e)
    except FileNotFoundError as e:
        _fail(str(e))
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Could not read {source}", e)


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    """Validate and inspect the posts and pages of a static blog."""
    settings = _settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    posts_dir: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding dated posts")] = None,
    ):
    """Load every document and report the first invariant violation, if any."""
    settings = _settings(overrides={"posts_dir": posts_dir})
    store = _load(path, settings)
    posts, pages = len(store.list_posts()), len(store.list_pages())
    typer.echo(f"OK - {posts} post(s), {pages} page(s)")


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    posts_dir: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding dated posts")] = None,
    pages: Annotated[bool, typer.Option("--pages", help="List pages instead of posts")] = False,
    ):
    """List posts newest first, or pages with their permalinks."""
    settings = _settings(overrides={"posts_dir": posts_dir})
    store = _load(path, settings)
    if pages:
        for doc in store.list_pages():
            typer.echo(f"{doc.permalink}\t{doc.title}")
        return
    for doc in store.list_posts():
        typer.echo(f"{doc.publication_date.isoformat()}\t{doc.identifier}\t{doc.title}")


def export_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    posts_dir: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding dated posts")] = None,
    ):
    """Write the validated documents with normalized metadata blocks to the output dir."""
    settings = _settings(overrides={"output_dir": out, "posts_dir": posts_dir})
    store = _load(path, settings)
    output_dir = Path(settings.output_dir)
    try:
        results = write_store(store, output_dir)
    except OSError as e:
        _fail("Export failed", e)
    for identifier, dest in results:
        typer.echo(f"  {identifier} -> {dest}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")
