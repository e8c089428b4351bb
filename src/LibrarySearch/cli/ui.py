"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to the
runner.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from LibrarySearch.cli.runner import CommandRunner
from LibrarySearch.config import load_config
from LibrarySearch.parser import SortParams


@click.group(help="LibrarySearch: normalize library search queries into filters.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    envvar="LIBRARY_SEARCH_CONFIG",
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    The config path may also come from LIBRARY_SEARCH_CONFIG, which is read
    after loading a local .env file. LIBRARY_SEARCH_LOG_LEVEL and
    LIBRARY_SEARCH_OUTPUT_DIR override single config values.
    """
    ctx.obj = load_config(config_path)


@cli.command("parse")
@click.argument("query", nargs=-1)
@click.option(
    "--each",
    is_flag=True,
    help="Treat every argument as a separate query instead of joining them.",
)
@click.pass_context
def parse_cmd(ctx: click.Context, query: tuple[str, ...], each: bool) -> None:
    """Normalize QUERY and write the resulting filter."""
    queries = list(query) if each else [" ".join(query)]
    CommandRunner(ctx.obj).run_parse(action=ctx.command.name, queries=queries)


@cli.command("sort")
@click.option("--by", "by", default=None, help="UPDATED_TIME, PUBLISHED_AT or SAVED_AT.")
@click.option(
    "--order",
    "order",
    type=click.Choice(["ASCENDING", "DESCENDING"], case_sensitive=False),
    default=None,
)
@click.pass_context
def sort_cmd(ctx: click.Context, by: str | None, order: str | None) -> None:
    """Resolve a structured sort request."""
    params = None
    if by is not None or order is not None:
        params = SortParams(by=by.upper() if by else None, order=order.upper() if order else None)
    CommandRunner(ctx.obj).run_sort(action=ctx.command.name, params=params)


def run() -> None:
    # .env must be loaded before click resolves envvar defaults.
    load_dotenv()
    cli()
