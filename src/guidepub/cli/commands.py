"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from guidepub.config import Settings, load_config
from guidepub.core.catalog import Catalog, load_catalog
from guidepub.core.export import write_catalog
from guidepub.crud.database import init_db, make_engine, reset_db
from guidepub.crud.guides import commit_catalog
from guidepub.errors import ContentError


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


def _catalog(settings: Settings, path: Optional[str]) -> Catalog:
    """Build the catalog from path (or settings.content_dir), failing cleanly on content errors."""
    root = Path(path or settings.content_dir)
    try:
        return load_catalog(root, settings)
    except (ContentError, ValueError) as e:
        _fail("Content build failed", e)
    except FileNotFoundError as e:
        _fail(str(e))


def _report_dangling(catalog: Catalog) -> int:
    """Print unresolved related guides per document. Returns the number of dangling links."""
    report = catalog.dangling()
    total = 0
    for slug, missing in report.items():
        typer.echo(f"  {slug}: unresolved related guide(s): {', '.join(missing)}", err=True)
        total += len(missing)
    return total


def _echo_slugs(slugs: tuple[str, ...], scope: str) -> None:
    if not slugs:
        typer.echo(f"No guides found for {scope}.")
        raise typer.Exit(1)
    for slug in slugs:
        typer.echo(slug)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content file or directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parallel parse threads")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--no-strict", help="Fail on unresolved related guides")] = None,
    commit: Annotated[bool, typer.Option("--commit", help="Also commit the snapshot to the database")] = False,
    ):
    """Build the catalog and export guide JSON plus the listing index."""
    settings = _settings(overrides={"output_dir": out, "workers": workers, "strict_links": strict})
    catalog = _catalog(settings, path)
    typer.echo(f"Built catalog of {len(catalog.registry)} guide(s)")

    dangling = _report_dangling(catalog)
    if dangling and settings.strict_links:
        _fail(f"{dangling} unresolved related guide reference(s)")

    output_dir = Path(settings.output_dir)
    try:
        written = write_catalog(catalog, output_dir)
    except OSError as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {len(written) - 1} guide(s) to {output_dir}/")

    if commit:
        _commit(settings, catalog)


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content file or directory")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--no-strict", help="Fail on unresolved related guides")] = None,
    ):
    """Validate front matter, slugs and related-guide references without writing output."""
    settings = _settings(overrides={"strict_links": strict})
    catalog = _catalog(settings, path)
    dangling = _report_dangling(catalog)
    typer.echo(f"{len(catalog.registry)} guide(s) OK, {dangling} unresolved related guide reference(s)")
    if dangling and settings.strict_links:
        raise typer.Exit(1)


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Guide slug")],
    path: Annotated[Optional[str], typer.Option("--content-dir", help="Content directory")] = None,
    ):
    """Print a guide's metadata."""
    settings = _settings()
    catalog = _catalog(settings, path)
    doc = catalog.get(slug)
    if doc is None:
        _fail(f"No guide with slug '{slug}'")
    typer.echo(f"{doc.title} ({doc.slug})")
    typer.echo(f"  path:       {doc.path}")
    typer.echo(f"  category:   {doc.category}")
    if doc.published_at:
        typer.echo(f"  published:  {doc.published_at.isoformat()}")
    if doc.difficulty:
        typer.echo(f"  difficulty: {doc.difficulty.value}")
    if doc.tags:
        typer.echo(f"  tags:       {', '.join(doc.tags)}")
    typer.echo(f"  reading:    {doc.reading_minutes} min")


def related_cmd(
    slug: Annotated[str, typer.Argument(help="Guide slug")],
    path: Annotated[Optional[str], typer.Option("--content-dir", help="Content directory")] = None,
    ):
    """List a guide's resolvable related guides in declaration order."""
    settings = _settings()
    catalog = _catalog(settings, path)
    doc = catalog.get(slug)
    if doc is None:
        _fail(f"No guide with slug '{slug}'")
    for r in catalog.resolve_related(doc):
        typer.echo(f"{r.slug}\t{r.title}")


def tag_cmd(
    tag: Annotated[str, typer.Argument(help="Tag (case-insensitive)")],
    path: Annotated[Optional[str], typer.Option("--content-dir", help="Content directory")] = None,
    ):
    """List guide slugs carrying a tag, newest first."""
    catalog = _catalog(_settings(), path)
    _echo_slugs(catalog.by_tag(tag), f"tag '{tag}'")


def category_cmd(
    category: Annotated[str, typer.Argument(help="Category (case-insensitive)")],
    path: Annotated[Optional[str], typer.Option("--content-dir", help="Content directory")] = None,
    ):
    """List guide slugs in a category, newest first."""
    catalog = _catalog(_settings(), path)
    _echo_slugs(catalog.by_category(category), f"category '{category}'")


def _commit(settings: Settings, catalog: Catalog) -> None:
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            counts, changes = commit_catalog(session, catalog)
            session.commit()
    except Exception as e:
        _fail("Commit failed", e)
    for status, slug in changes:
        typer.echo(f"  {status}: {slug}")
    typer.echo(
        f"Commit complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['deleted']} deleted"
    )


def commit_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content file or directory")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Build the catalog and replace the stored snapshot with it."""
    settings = _settings(overrides={"db_url": db_url})
    catalog = _catalog(settings, path)
    _commit(settings, catalog)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
