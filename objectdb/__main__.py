"""CLI entry point for building and querying an object index."""

from __future__ import annotations

import logging
import sys
from typing import Callable

import click

from objectdb.config import AppConfig, load_config
from objectdb.domain.exceptions import ObjectDbException
from objectdb.domain.services import ObjectIndexService
from objectdb.presentation.formatter import MarkdownFormatter


def _service(ctx: click.Context) -> ObjectIndexService:
    from objectdb.server import create_service

    config: AppConfig = ctx.obj
    if not config.index.source:
        raise click.UsageError(
            "index.source is required. Set via --source, OBJECTDB_SOURCE, or config file."
        )
    try:
        return create_service(config)
    except ObjectDbException as e:
        raise click.ClickException(str(e)) from e


def _run(fn: Callable[[], str]) -> str:
    try:
        return fn()
    except ObjectDbException as e:
        return MarkdownFormatter().format_error(e)


@click.group()
@click.option("--config", "-c", default=None, help="Path to YAML config file")
@click.option(
    "--source", "-s",
    default=None,
    help="JSON or YAML file with index entries (overrides config/env)",
)
@click.option(
    "--layout",
    type=click.Choice(["tree", "flat"]),
    default=None,
    help="Category layout: hierarchical 'tree' or 'flat' (overrides config/env)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=None,
    help="Enable debug logging (overrides config/env)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: str | None,
    source: str | None,
    layout: str | None,
    verbose: bool | None,
) -> None:
    """Prefix-indexed, categorized object store.

    Configuration priority: YAML config < env vars (OBJECTDB_*) < CLI arguments.
    """
    cli_overrides = {
        "index.source": source,
        "index.layout": layout,
        "server.verbose": verbose,
    }
    try:
        app_config = load_config(config_path=config, cli_overrides=cli_overrides)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    log_level = logging.DEBUG if app_config.server.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = app_config


@cli.command()
@click.argument("query")
@click.option("--category", default=None, help="Category path to search in")
@click.option("--exact", is_flag=True, default=False, help="Match whole words only")
@click.option("--limit", type=int, default=None, help="Maximum results to return")
@click.pass_context
def search(ctx: click.Context, query: str, category: str | None, exact: bool, limit: int | None) -> None:
    """Search objects by keyword prefixes."""
    service = _service(ctx)
    formatter = MarkdownFormatter()
    click.echo(_run(
        lambda: formatter.format_query(query)
        + formatter.format_search_results(service.search(query, category, limit, exact))
    ))


@cli.command()
@click.argument("path")
@click.pass_context
def browse(ctx: click.Context, path: str) -> None:
    """List objects filed under a category and its sub-categories."""
    service = _service(ctx)
    formatter = MarkdownFormatter()
    click.echo(_run(lambda: formatter.format_search_results(service.browse(path))))


@cli.command()
@click.argument("parent", required=False)
@click.pass_context
def categories(ctx: click.Context, parent: str | None) -> None:
    """List category paths."""
    service = _service(ctx)
    click.echo(MarkdownFormatter().format_categories(service.list_categories(parent)))


@cli.command()
@click.argument("prefix")
@click.option("--category", default=None, help="Category path to look in")
@click.pass_context
def words(ctx: click.Context, prefix: str, category: str | None) -> None:
    """List indexed words starting with PREFIX."""
    service = _service(ctx)
    formatter = MarkdownFormatter()
    click.echo(_run(lambda: formatter.format_words(service.get_words(prefix, category), prefix)))


@cli.command()
@click.argument("path")
@click.pass_context
def entry(ctx: click.Context, path: str) -> None:
    """Show the object named by PATH (category path plus object name)."""
    service = _service(ctx)
    formatter = MarkdownFormatter()
    click.echo(_run(lambda: formatter.format_entry(service.get_entry(path))))


@cli.command()
@click.option("--category", default=None, help="Category whose trie to print")
@click.pass_context
def dump(ctx: click.Context, category: str | None) -> None:
    """Print the keyword trie as an indented tree."""
    service = _service(ctx)
    formatter = MarkdownFormatter()
    click.echo(_run(lambda: formatter.format_trie(service.get_trie(category))))


@cli.command()
@click.option(
    "--mode", "-m",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=None,
    help="Transport mode (overrides config/env)",
)
@click.option("--port", type=int, default=None, help="Port for HTTP server (overrides config/env)")
@click.pass_context
def serve(ctx: click.Context, mode: str | None, port: int | None) -> None:
    """Run the MCP server over the index."""
    from objectdb.server import create_server

    app_config: AppConfig = ctx.obj
    if mode is not None:
        app_config.server.mode = mode
    if port is not None:
        app_config.server.port = port
    if not app_config.index.source:
        raise click.UsageError(
            "index.source is required. Set via --source, OBJECTDB_SOURCE, or config file."
        )

    try:
        server = create_server(app_config)
    except ObjectDbException as e:
        raise click.ClickException(str(e)) from e

    if app_config.server.mode == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=app_config.server.mode, port=app_config.server.port)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
