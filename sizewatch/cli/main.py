"""Click commands for sizewatch."""

from __future__ import annotations

import asyncio
import json

import click

from sizewatch import __version__
from sizewatch.app import EXIT_FATAL, build_components, main
from sizewatch.config import load_config
from sizewatch.errors import SizewatchError
from sizewatch.models.config import SizewatchConfig
from sizewatch.observability.logging import bind_run_context, setup_logging


def _load(log_level: str | None) -> SizewatchConfig:
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_level:
        config.log.level = log_level
    setup_logging(config.log.level)
    return config


@click.group()
@click.version_option(__version__, prog_name="sizewatch")
def cli() -> None:
    """Watch release artifact sizes and report significant changes."""


@cli.command()
@click.option("--log-level", type=click.Choice(["debug", "info", "warning", "error"]), default=None)
def run(log_level: str | None) -> None:
    """Compare tracked versions with their predecessors and report new changes."""
    config = _load(log_level)
    raise SystemExit(asyncio.run(main(config)))


@cli.command()
@click.argument("base")
@click.argument("changed")
@click.option("--log-level", type=click.Choice(["debug", "info", "warning", "error"]), default="warning")
def compare(base: str, changed: str, log_level: str) -> None:
    """Print every size change between BASE and CHANGED as JSON."""
    config = _load(log_level)
    bind_run_context("compare")

    async def _compare() -> list[dict[str, object]]:
        components = build_components(config)
        try:
            changes = await components.comparator.compare(base, changed)
        finally:
            await components.close()
        return [change.to_dict() for change in changes]

    try:
        records = asyncio.run(_compare())
    except SizewatchError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_FATAL) from exc
    click.echo(json.dumps(records, indent=2))


@cli.command()
@click.option("--log-level", type=click.Choice(["debug", "info", "warning", "error"]), default="warning")
def latest(log_level: str) -> None:
    """Print the tracked versions and the predecessor each is compared with."""
    config = _load(log_level)

    async def _latest() -> list[dict[str, str | None]]:
        components = build_components(config)
        try:
            source = components.source
            return [
                {"version": version, "previous": await source.get_previous_version(version)}
                for version in await source.get_latest_versions()
            ]
        finally:
            await components.close()

    try:
        pairs = asyncio.run(_latest())
    except SizewatchError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_FATAL) from exc
    click.echo(json.dumps(pairs, indent=2))
