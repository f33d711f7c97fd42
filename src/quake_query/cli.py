"""Command-line interface for querying the earthquake catalog."""

from __future__ import annotations

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table

from quake_query.client import QueryClient
from quake_query.config import Settings
from quake_query.errors import QuakeQueryError, TransportError
from quake_query.logging_config import configure_logging
from quake_query.models import QueryResult

console = Console()

min_magnitude_option = click.option(
    "--min-magnitude", type=float, default=0.0, show_default=True,
    help="Only include events at or above this magnitude.",
)


@click.group()
@click.option("--base-url", default=None, help="Override the query endpoint.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.option("--log-level", default=None, help="Logging level (default WARNING).")
@click.pass_context
def main(ctx: click.Context, base_url: str | None, as_json: bool, log_level: str | None) -> None:
    """Query the USGS earthquake catalog."""
    settings = Settings.from_env()
    configure_logging((log_level or settings.log_level).upper(), stream=sys.stderr)
    ctx.obj = {
        "client": QueryClient(base_url or settings.base_url),
        "as_json": as_json,
    }


@main.command()
@click.argument("start", type=click.DateTime())
@click.argument("end", type=click.DateTime())
@min_magnitude_option
@click.pass_obj
def date(obj: dict, start, end, min_magnitude: float) -> None:
    """Events between START and END (local time unless offset given)."""
    client: QueryClient = obj["client"]
    _run(obj, client.query_by_date(start, end, min_magnitude))


@main.command()
@click.option("--min-lat", type=float, required=True)
@click.option("--min-lon", type=float, required=True)
@click.option("--max-lat", type=float, required=True)
@click.option("--max-lon", type=float, required=True)
@min_magnitude_option
@click.pass_obj
def rectangle(obj: dict, min_lat, min_lon, max_lat, max_lon, min_magnitude: float) -> None:
    """Events inside a latitude/longitude rectangle."""
    client: QueryClient = obj["client"]
    _run(obj, client.query_by_rectangle(min_lat, min_lon, max_lat, max_lon, min_magnitude))


@main.command()
@click.option("--lat", type=float, required=True)
@click.option("--lon", type=float, required=True)
@click.option("--radius", type=float, required=True)
@click.option("--km", is_flag=True, help="Radius is in kilometers instead of degrees.")
@min_magnitude_option
@click.pass_obj
def circle(obj: dict, lat, lon, radius, km: bool, min_magnitude: float) -> None:
    """Events within a radius of a point."""
    client: QueryClient = obj["client"]
    if km:
        coro = client.query_by_circle_km(lat, lon, radius, min_magnitude)
    else:
        coro = client.query_by_circle_degrees(lat, lon, radius, min_magnitude)
    _run(obj, coro)


def _run(obj: dict, coro) -> None:
    try:
        result = asyncio.run(coro)
    except (QuakeQueryError, TransportError) as exc:
        raise click.ClickException(str(exc)) from exc

    if obj["as_json"]:
        click.echo(result.to_json())
    else:
        _print_result(result)


def _magnitude_color(mag: float | None) -> str:
    if mag is None:
        return "white"
    return "red" if mag >= 5.0 else "yellow" if mag >= 3.0 else "green"


def _print_result(result: QueryResult) -> None:
    table = Table(title=result.metadata.title)
    table.add_column("ID")
    table.add_column("Mag", justify="right")
    table.add_column("Place")
    table.add_column("Time (UTC)")
    table.add_column("Depth km", justify="right")

    for f in result.features:
        mag = f.magnitude
        color = _magnitude_color(mag)
        table.add_row(
            f.id or "",
            f"[bold {color}]{mag:.1f}[/]" if mag is not None else "-",
            f.place or "Unknown",
            f"{f.time:%Y-%m-%d %H:%M}" if f.time else "-",
            f"{f.depth:.1f}" if f.depth is not None else "-",
        )

    console.print(table)
    click.echo(f"{len(result.features)} earthquake(s)")


if __name__ == "__main__":
    main()
