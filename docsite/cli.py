"""Docsite CLI - build, inspect and serve the documentation index.

Usage:
    docsite build                       # Regenerate the index (env / DOCSITE_CONFIG)
    docsite build -c docsite.yaml       # Use a config file
    docsite build --docs-dir docs -o public/docs-index.json
    docsite search "getting started"    # Query the generated index
    docsite show getting-started        # Print one document's metadata
    docsite serve --port 8000           # Run the read API
"""

from __future__ import annotations

from dataclasses import replace
import logging
import os

import click

from docsite.errors import ConfigError, DocsiteError


def _load(config_path: str | None):
    """Load config from an explicit path, DOCSITE_CONFIG, or the environment."""
    from docsite.pipeline.config import load_config

    path = config_path or os.environ.get("DOCSITE_CONFIG")
    if config_path and not os.path.exists(config_path):
        raise FileNotFoundError(f"Config not found: {config_path}")
    return load_config(path)


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_header(text: str):
    """Print section header."""
    click.echo(f"\n{'=' * 50}\n{text}\n{'=' * 50}\n")


@click.group()
@click.version_option(package_name="docsite")
def cli():
    """Docsite CLI - documentation index builder."""
    pass


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--docs-dir", default=None, help="Source docs directory (overrides config)")
@click.option("--output", "-o", default=None, help="Index output path (overrides config)")
@click.option("--summary", is_flag=True, help="Write the reduced search projection")
@click.option("--no-progress", is_flag=True, help="Hide the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def build(
    config: str | None,
    docs_dir: str | None,
    output: str | None,
    summary: bool,
    no_progress: bool,
    verbose: bool,
):
    """Regenerate the docs index from Markdown sources."""
    from docsite.pipeline.pipeline import run_full_pipeline

    try:
        cfg = _load(config)
    except (OSError, DocsiteError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    _setup_logging(cfg.log_level, verbose)
    if no_progress:
        cfg = replace(cfg, build=replace(cfg.build, progress=False))

    print_header("Docs Index Build")
    click.echo(f"Docs dir: {docs_dir or cfg.docs_dir}")

    try:
        stats = run_full_pipeline(
            config=cfg,
            docs_dir=docs_dir or "",
            output_path=output or "",
            summary=summary,
        )
    except OSError as e:
        click.echo(f"✗ Build failed: {e}", err=True)
        raise click.Abort()

    click.echo(f"✓ Indexed: {stats['indexed']}/{stats['total']} documents")
    click.echo(f"  Categories: {stats['categories']}")
    click.echo(f"  Tags: {stats['tags']}")
    if stats["skipped"]:
        click.echo(f"  Skipped: {len(stats['skipped'])}")
        for slug in stats["skipped"][:5]:
            click.echo(f"    - {slug}")
    click.echo(f"✓ Index saved to: {stats['output']}")


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
def validate(config: str | None):
    """Validate configuration file."""
    try:
        cfg = _load(config)
    except (OSError, ValueError, DocsiteError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    click.echo("✓ Configuration is valid")
    click.echo(f"  Docs dir: {cfg.docs_dir}")
    click.echo(f"  Index path: {cfg.index_path}")
    click.echo(f"  Search limit: {cfg.search.limit}")


@cli.command("search")
@click.argument("query")
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--index", "index_path", default=None, help="Index path (overrides config)")
@click.option("--limit", "-k", type=int, default=None, help="Result cap")
def search_command(
    query: str, config: str | None, index_path: str | None, limit: int | None
):
    """Search the generated index."""
    from docsite.retrieval.substring import SnapshotSearcher
    from docsite.storage.snapshot import SnapshotStore

    try:
        cfg = _load(config)
    except (OSError, DocsiteError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    store = SnapshotStore(index_path or cfg.index_path)
    if not store.exists():
        click.echo(f"No index at {store.path}; run `docsite build` first", err=True)

    results = SnapshotSearcher(store, limit=cfg.search.limit).search(query, limit=limit)
    if not results:
        click.echo("No results")
        return
    for entry in results:
        click.echo(f"{entry.get('slug')}\t{entry.get('title')}\t[{entry.get('category')}]")


@cli.command()
@click.argument("slug")
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--content", is_flag=True, help="Also print the Markdown body")
def show(slug: str, config: str | None, content: bool):
    """Print a single document's metadata."""
    from docsite.pipeline.loader import DocumentLoader

    try:
        cfg = _load(config)
        record = DocumentLoader(cfg).load_or_raise(slug)
    except (ConfigError, FileNotFoundError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()
    except (DocsiteError, OSError, UnicodeDecodeError) as e:
        click.echo(f"✗ {e}", err=True)
        raise click.Abort()

    click.echo(f"Title: {record.title}")
    click.echo(f"Category: {record.category} (order {record.order})")
    click.echo(f"Tags: {', '.join(record.tags) or '-'}")
    click.echo(f"Reading time: {record.reading_time} min")
    click.echo(f"Date: {record.date}")
    click.echo(f"Updated: {record.updated}")
    click.echo(f"Excerpt: {record.excerpt}")
    if content:
        click.echo("")
        click.echo(record.content)


@cli.command()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--host", default=None, help="Bind host (overrides config)")
@click.option("--port", type=int, default=None, help="Bind port (overrides config)")
def serve(config: str | None, host: str | None, port: int | None):
    """Run the read-only docs API."""
    import uvicorn

    from docsite.api.app import create_app

    try:
        cfg = _load(config)
    except (OSError, DocsiteError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    _setup_logging(cfg.log_level, verbose=False)
    uvicorn.run(
        create_app(cfg),
        host=host or cfg.api.host,
        port=port or cfg.api.port,
    )


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
