"""Command-line trip planner: find campsites and amenities along a route.

Usage:
    python main.py "Moab, UT" "Denver, CO"
    python main.py "-122.4194,37.7749" "-118.2437,34.0522" --buffer 10 --categories campsite,gas
    python main.py --polyline "_p~iF~ps|U_ulLnnqC" --categories gas,water --seed 7
"""

import argparse
import asyncio
import logging
import random
import sys

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from campstops import InvalidRouteError, SearchConfig, StopPlan, StopType, build_engine
from campstops.config import settings
from campstops.errors import RouteError
from campstops.models import Route
from campstops.tools import MapboxRouteProvider
from campstops.utils.geo import format_eta, route_length
from campstops.utils.gpx import create_gpx_from_plan, decode_polyline, save_gpx_file


console = Console()


def parse_categories(value: str) -> frozenset[StopType]:
    if value.strip().lower() == "all":
        return frozenset(StopType)
    try:
        return frozenset(StopType(part.strip().lower()) for part in value.split(",") if part.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"{e}. Choose from: {', '.join(t.value for t in StopType)}"
        ) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find stops along a road trip route")
    parser.add_argument("start", nargs="?", help="Start place name or 'lng,lat'")
    parser.add_argument("end", nargs="?", help="Destination place name or 'lng,lat'")
    parser.add_argument("--polyline", help="Encoded route polyline instead of start/end")
    parser.add_argument(
        "--buffer", type=float, default=settings.default_buffer_distance_miles,
        help="Max distance from route in miles",
    )
    parser.add_argument(
        "--categories", type=parse_categories, default=frozenset(StopType),
        help="Comma-separated stop types, or 'all'",
    )
    parser.add_argument(
        "--samples", type=int, default=settings.default_max_poi_samples,
        help="Live places lookups along the route",
    )
    parser.add_argument("--seed", type=int, help="Seed for generated amenities")
    parser.add_argument("--sort", action="store_true", help="Order stops along the route")
    parser.add_argument("--gpx", help="Write route and stops to this GPX file")
    return parser


def render_plan(route: Route, plan: StopPlan) -> None:
    """Print the stops as a table."""
    table = Table(title=f"Stops: {route.start_name} → {route.end_name}")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Source", style="dim")
    table.add_column("Off route", justify="right")
    table.add_column("Along route", justify="right")
    table.add_column("ETA", justify="right")
    
    for stop in plan.stops:
        table.add_row(
            stop.name,
            stop.stop_type.value,
            stop.provenance.value,
            f"{stop.distance_from_route_m / 1000:.1f} km",
            f"{stop.distance_along_route_m / 1000:.0f} km",
            format_eta(stop.estimated_time_from_start),
        )
    
    console.print(table)
    console.print(
        f"[green]✓[/green] {len(plan.stops)} stops along "
        f"{route.distance_m / 1000:.0f} km"
    )
    if plan.degraded:
        console.print("[yellow]Some sources were unavailable; results may be incomplete.[/yellow]")
        for failure in plan.failures:
            console.print(f"[yellow]![/yellow] {failure.source}: {failure.message}")


async def run(args: argparse.Namespace) -> int:
    config = SearchConfig(
        buffer_distance_miles=args.buffer,
        enabled_categories=args.categories,
        max_poi_samples_along_route=args.samples,
    )
    rng = random.Random(args.seed) if args.seed is not None else None
    
    async with httpx.AsyncClient() as client:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            if args.polyline:
                try:
                    polyline = decode_polyline(args.polyline)
                except ValueError as e:
                    raise InvalidRouteError(f"Could not decode --polyline: {e}") from e
                route = Route(
                    polyline=polyline,
                    distance_m=route_length(polyline) if len(polyline) > 1 else 0,
                    start_name="start",
                    end_name="end",
                )
            else:
                task = progress.add_task("🛣️ Calculating route...", total=None)
                provider = MapboxRouteProvider(
                    settings.mapbox_token, client=client, base_url=settings.mapbox_base_url
                )
                route = await provider.get_route(args.start, args.end)
                progress.remove_task(task)
            
            task = progress.add_task("⛺ Finding stops along the route...", total=None)
            engine = build_engine(settings, client=client, rng=rng)
            plan = await engine.plan(
                route.polyline,
                config,
                route_distance_m=route.distance_m or None,
                sort_by_route=args.sort,
            )
            progress.remove_task(task)
    
    render_plan(route, plan)
    
    if args.gpx:
        save_gpx_file(
            create_gpx_from_plan(f"{route.start_name} to {route.end_name}", route.polyline, plan.stops),
            args.gpx,
        )
        console.print(f"[green]✓[/green] GPX written to {args.gpx}")
    
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    
    if not args.polyline:
        if not (args.start and args.end):
            parser.error("give START and END, or --polyline")
        missing = settings.validate_required()
        if missing:
            console.print(Panel(
                "[red]Missing required configuration:[/red]\n" +
                "\n".join(f"  • {m}" for m in missing) +
                "\n\n[dim]Set them in the environment or in .env.[/dim]",
                title="Configuration Error",
                border_style="red",
            ))
            sys.exit(1)
    
    try:
        sys.exit(asyncio.run(run(args)))
    except (InvalidRouteError, RouteError) as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
