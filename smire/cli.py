"""SMIRE command line: serve the MCP tools, call one tool, check the dataset."""

from __future__ import annotations

import json
from dataclasses import replace

import click

from smire.agents.server import serve as run_server
from smire.agents.tools import TOOL_CATALOG, PaymentsAnalyticsTools
from smire.common.errors import InvalidArgumentError, UnknownToolError
from smire.common.settings import TRANSPORTS, Settings, load_settings
from smire.data.quality import profile_dataset
from smire.data.store import RecordStore
from smire.observability.logging import configure_logging


def _settings(config: str | None) -> Settings:
    try:
        settings = load_settings(config)
    except InvalidArgumentError as exc:
        raise click.UsageError(str(exc)) from exc
    configure_logging(settings.log_level, settings.log_json)
    return settings


def _parse_arguments(pairs: tuple[str, ...]) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--arg")
        key, value = pair.split("=", 1)
        arguments[key.strip()] = value
    return arguments


@click.group()
def cli() -> None:
    """SMIRE payments analytics CLI."""


@cli.command()
@click.option("--config", type=click.Path(exists=True), default=None)
@click.option("--transport", type=click.Choice(list(TRANSPORTS)), default=None)
def serve(config: str | None, transport: str | None) -> None:
    """Start the MCP server."""
    settings = _settings(config)
    if transport:
        settings = replace(settings, transport=transport)
    run_server(settings)


@cli.command()
@click.argument("tool_name")
@click.option("--arg", "-a", "pairs", multiple=True, help="Tool argument as key=value.")
@click.option("--config", type=click.Path(exists=True), default=None)
def call(tool_name: str, pairs: tuple[str, ...], config: str | None) -> None:
    """Run one tool and print its answer as JSON."""
    settings = _settings(config)
    tools = PaymentsAnalyticsTools(RecordStore.from_path(settings.data_path))
    try:
        result = tools.call(tool_name, _parse_arguments(pairs))
    except UnknownToolError as exc:
        names = ", ".join(spec.name for spec in TOOL_CATALOG)
        click.echo(f"ERROR: {exc}. Available tools: {names}", err=True)
        raise SystemExit(2) from exc
    except InvalidArgumentError as exc:
        click.echo(f"ERROR: {exc}", err=True)
        raise SystemExit(2) from exc

    if isinstance(result, str):
        click.echo(result)
    else:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@cli.command("check-data")
@click.option("--config", type=click.Path(exists=True), default=None)
def check_data(config: str | None) -> None:
    """Print a data quality profile of the configured dataset."""
    settings = _settings(config)
    report = profile_dataset(RecordStore.from_path(settings.data_path))
    click.echo(json.dumps(report, indent=2, ensure_ascii=False))
    if report["missing_columns"]:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
