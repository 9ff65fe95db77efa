"""Click commands: ``tpology resource list`` and ``tpology resource graph``."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tpology.config import load_config
from tpology.errors import TpologyError
from tpology.git.cache import Cache
from tpology.graph.builder import build_graph
from tpology.inventory.inventory import Inventory
from tpology.inventory.io import load_inventory
from tpology.models.config import TpologyConfig
from tpology.observability.logging import LOG_FORMATS, get_logger, setup_logging
from tpology.render.dot import write_dot
from tpology.render.dump import dump_graph, dump_names, dump_resources
from tpology.render.table import kinds_table, resources_table

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _fetch_inventory(config: TpologyConfig) -> Inventory:
    """Load the inventory from the local directory or the cached remote clone."""
    path = config.inventory.local
    if not path:
        repo = Cache(config.git.cache_dir).repository(config.inventory.url, config.inventory.ref)
        path = str(repo.fetch())
    return load_inventory(path, strict=config.inventory.strict)


def _emit(config: TpologyConfig, text: str) -> None:
    if not config.quiet:
        click.echo(text.rstrip("\n"))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-q", "--quiet", is_flag=True, help="Suppress all output.")
@click.option("--log-level", type=click.Choice(_LOG_LEVELS), default=None, help="Log level (stderr).")
@click.option("--log-format", type=click.Choice(LOG_FORMATS), default=None, help="Log format (stderr); auto picks console on a terminal.")
@click.option("--git-cache-dir", type=click.Path(file_okay=False), default=None, help="Path to the git cache directory.")
@click.option("-l", "--inventory-local", type=click.Path(), default=None, help="Path to a local inventory directory.")
@click.option("-i", "--inventory", "inventory_url", default=None, help="URL of the inventory repository.")
@click.option("-r", "--inventory-ref", default=None, help="Git reference of the inventory repository.")
@click.option("--strict", is_flag=True, help="Fail on duplicate (kind, name) resources.")
@click.pass_context
def cli(
    ctx: click.Context,
    quiet: bool,
    log_level: str | None,
    log_format: str | None,
    git_cache_dir: str | None,
    inventory_local: str | None,
    inventory_url: str | None,
    inventory_ref: str | None,
    strict: bool,
) -> None:
    """Inventory tool: list resources and graph their references."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    # Flags override the environment.
    if quiet:
        config.quiet = True
    if log_level is not None:
        config.log = replace(config.log, level=log_level)
    if log_format is not None:
        config.log = replace(config.log, format=log_format)
    if git_cache_dir is not None:
        config.git = replace(config.git, cache_dir=git_cache_dir)
    inv = config.inventory
    config.inventory = replace(
        inv,
        local=inventory_local if inventory_local is not None else inv.local,
        url=inventory_url if inventory_url is not None else inv.url,
        ref=inventory_ref if inventory_ref is not None else inv.ref,
        strict=strict or inv.strict,
    )

    setup_logging(config.log.level, config.log.format)
    ctx.obj = config


@cli.group()
def resource() -> None:
    """Inspect inventory resources."""


@resource.command(name="list")
@click.argument("kind", required=False)
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.pass_obj
def list_resources(config: TpologyConfig, kind: str | None, fmt: str) -> None:
    """List kinds, or the resources of KIND."""
    try:
        inv = _fetch_inventory(config)
    except TpologyError as exc:
        raise click.ClickException(str(exc)) from exc

    if kind is None:
        kinds = inv.kinds()
        if fmt == "table":
            _print_table(config, kinds_table(kinds))
        else:
            _emit(config, dump_names(kinds, fmt))
        return

    resources = [inv.resources_of(kind)[name] for name in sorted(inv.resources_of(kind))]
    if fmt == "table":
        _print_table(config, resources_table(resources))
    else:
        _emit(config, dump_resources(resources, fmt))


@resource.command(name="graph")
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["dot", "json", "yaml"]),
    default="dot",
    show_default=True,
    help="Output format.",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False, writable=True), default=None, help="Output file.")
@click.pass_obj
def graph_resources(config: TpologyConfig, fmt: str, output: str | None) -> None:
    """Build the reference graph and dump it."""
    log = get_logger("cli")
    try:
        graph = build_graph(_fetch_inventory(config))
    except TpologyError as exc:
        raise click.ClickException(str(exc)) from exc

    if output is None and config.quiet:
        return
    try:
        out = Path(output).open("w", encoding="utf-8") if output else sys.stdout
    except OSError as exc:
        raise click.ClickException(f"{output}: {exc.strerror or exc}") from exc
    try:
        if fmt == "dot":
            edges = write_dot(out, graph)
        else:
            out.write(dump_graph(graph, fmt).rstrip("\n") + "\n")
            edges = sum(1 for _ in graph.edges())
    finally:
        if output:
            out.close()
    log.info("graph_written", format=fmt, output=output or "-", nodes=len(graph), edges=edges)


def _print_table(config: TpologyConfig, table: Table) -> None:
    if not config.quiet:
        Console(file=sys.stdout, width=200).print(table)
