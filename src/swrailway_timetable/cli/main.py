"""CLI main entry point for the railway timetable client."""

import logging
import sys
from datetime import datetime as dt_module
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from ..core import (
    SwRailwayClient,
    TimetableError,
    ValidationError,
)
from ..core.client import DEFAULT_TIMEOUT, ENDPOINTS, MODERN_ENDPOINT
from ..core.layouts import layout_names
from ..core.time_filter import REFERENCE_TIMEZONE
from .formatters import (
    format_schedule_json,
    format_schedule_table,
    format_station_json,
    format_station_table,
)

console = Console()
error_console = Console(stderr=True)

LANG_OPTION = click.option(
    "--lang",
    "-l",
    default="ua",
    envvar="SWRAILWAY_LANG",
    show_default=True,
    help="Language: ua, ru, en (or an upstream suffix such as _ru)",
)
FORMAT_OPTION = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)


def _make_client(ctx: click.Context) -> SwRailwayClient:
    options: dict[str, Any] = ctx.obj
    return SwRailwayClient(
        timeout=options["timeout"],
        endpoint=options["endpoint"],
        layout=options["layout"],
    )


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--timeout",
    "-t",
    default=DEFAULT_TIMEOUT,
    envvar="SWRAILWAY_TIMEOUT",
    show_default=True,
    help="Request timeout in seconds",
)
@click.option(
    "--endpoint",
    "-e",
    type=click.Choice(sorted(ENDPOINTS)),
    default=MODERN_ENDPOINT.name,
    envvar="SWRAILWAY_ENDPOINT",
    show_default=True,
    help="Upstream endpoint variant",
)
@click.option(
    "--layout",
    type=click.Choice(layout_names()),
    default=None,
    help="Override the schedule table layout of the endpoint",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed information")
@click.pass_context
def cli(
    ctx: click.Context,
    timeout: int,
    endpoint: str,
    layout: str | None,
    verbose: bool,
) -> None:
    """South-Western Railway timetable - look up stations and train schedules."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )
    ctx.obj = {
        "timeout": timeout,
        "endpoint": endpoint,
        "layout": layout,
        "verbose": verbose,
    }


@cli.command()
@click.argument("station_id")
@LANG_OPTION
@FORMAT_OPTION
@click.pass_context
def station(
    ctx: click.Context, station_id: str, lang: str, output_format: str
) -> None:
    """Show a single station by its upstream id.

    Examples:
        swrailway station 88
        swrailway station 88 --lang en --format json
    """
    with console.status(f"[bold green]Looking up station {station_id}..."):
        result = _make_client(ctx).fetch_station(station_id, lang)

    if not result.ok:
        _fail(f"Station lookup failed ({result.failure})")
    if result.data is None:
        error_console.print(f"[yellow]Station {station_id} not found[/yellow]")
        sys.exit(1)

    if output_format == "json":
        click.echo(format_station_json([result.data]))
    else:
        format_station_table([result.data], verbose=True)


@cli.command()
@click.argument("name")
@LANG_OPTION
@FORMAT_OPTION
@click.pass_context
def stations(ctx: click.Context, name: str, lang: str, output_format: str) -> None:
    """Search stations by (partial) name.

    Examples:
        swrailway stations Свя
        swrailway stations Kov --lang en
    """
    with console.status(f"[bold green]Searching stations matching {name}..."):
        result = _make_client(ctx).fetch_stations(name, lang)

    if not result.ok:
        _fail(f"Station search failed ({result.failure})")

    found = result.data or []
    if output_format == "json":
        click.echo(format_station_json(found))
    else:
        format_station_table(found, verbose=ctx.obj["verbose"])


@cli.command()
@click.argument("from_id")
@click.argument("to_id")
@click.option(
    "--date", "-d", "date_str", help="Travel date (YYYY-MM-DD), default today"
)
@click.option(
    "--remaining",
    "-r",
    is_flag=True,
    help="Only trains departing later today",
)
@LANG_OPTION
@FORMAT_OPTION
@click.option(
    "--save-html",
    help="Save raw HTML response to file for debugging",
    type=click.Path(),
)
@click.pass_context
def schedule(
    ctx: click.Context,
    from_id: str,
    to_id: str,
    date_str: str | None,
    remaining: bool,
    lang: str,
    output_format: str,
    save_html: str | None,
) -> None:
    """Show trains between two stations.

    Examples:
        swrailway schedule 85 88
        swrailway schedule 85 88 --date 2018-07-18 --format json
        swrailway schedule 85 88 --remaining
    """
    travel_date = None
    if date_str:
        try:
            travel_date = dt_module.strptime(date_str, "%Y-%m-%d").date()
        except ValueError:
            _fail("Invalid date format. Use YYYY-MM-DD")

    try:
        with console.status(
            f"[bold green]Fetching schedule from {from_id} to {to_id}..."
        ):
            result = _make_client(ctx).fetch_schedule(
                travel_date,
                lang,
                from_id,
                to_id,
                only_remaining=remaining,
                save_html_path=save_html,
            )
    except ValidationError as e:
        _fail(str(e))
    except TimetableError as e:
        _fail(f"Unexpected error: {e}")

    if not result.ok:
        _fail(f"Schedule lookup failed ({result.failure})")

    records = result.data or []
    if output_format == "json":
        click.echo(format_schedule_json(records))
    else:
        title = f"Trains {from_id} → {to_id}"
        if date_str:
            title += f" on {date_str}"
        format_schedule_table(records, title=title, verbose=ctx.obj["verbose"])


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    options = ctx.obj
    endpoint = ENDPOINTS[options["endpoint"]]
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"• Endpoint: {endpoint.name} ({endpoint.base_url})")
    console.print(f"• Table layout: {options['layout'] or endpoint.layout}")
    console.print(f"• Timeout: {options['timeout']} seconds")
    console.print(f"• Reference timezone: {REFERENCE_TIMEZONE.key}")


if __name__ == "__main__":
    cli()
