"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.table import Table

from ..core.models import ScheduleRecord, Station

console = Console()


def format_schedule_table(
    records: list[ScheduleRecord], title: str = "Schedule", verbose: bool = False
) -> None:
    """Display schedule records as a rich table."""
    if not records:
        console.print("No trains found.")
        return

    # Intermediate stations and distance only exist in the newer layout
    has_connections = any(
        r.arrival_station_from or r.arrival_station_to or r.distance for r in records
    )

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Train", style="cyan", no_wrap=True)
    table.add_column("Runs", style="yellow")
    table.add_column("Route", style="green")
    table.add_column("Departs", style="bold green", no_wrap=True)
    table.add_column("Arrives", style="bold blue", no_wrap=True)
    table.add_column("In trip", style="magenta", no_wrap=True)
    if verbose and has_connections:
        table.add_column("Via", style="dim cyan")
        table.add_column("Distance", style="dim")
    if verbose:
        table.add_column("Valid", style="dim")

    for record in records:
        row = [
            record.id,
            record.period,
            record.route,
            record.departure_from or record.arrival_from or "-",
            record.arrival_to or record.departure_to or "-",
            record.time_in_trip or "-",
        ]
        if verbose and has_connections:
            via = " → ".join(
                s for s in (record.arrival_station_from, record.arrival_station_to) if s
            )
            row.extend([via or "-", record.distance or "-"])
        if verbose:
            valid = "–".join(d for d in (record.active_from, record.active_to) if d)
            row.append(valid or "-")
        table.add_row(*row)

    console.print(table)


def format_schedule_json(records: list[ScheduleRecord]) -> str:
    """Format schedule records as JSON using the upstream field names."""
    return json.dumps(
        [r.model_dump(by_alias=True) for r in records], ensure_ascii=False, indent=2
    )


def format_station_table(stations: list[Station], verbose: bool = False) -> None:
    """Display stations as a table."""
    if not stations:
        console.print("No stations found.")
        return

    table = Table(title="Stations", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    if verbose:
        table.add_column("Info", style="blue")

    for station in stations:
        row = [station.id, station.label]
        if verbose:
            row.append(station.info)
        table.add_row(*row)

    console.print(table)


def format_station_json(stations: list[Station]) -> str:
    """Format stations as JSON."""
    return json.dumps(
        [s.model_dump() for s in stations], ensure_ascii=False, indent=2
    )
