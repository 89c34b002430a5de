"""
Backflow lead scoring CLI

Examples:
    # Score a prospect file, CSV to stdout
    leadgen score prospects.json

    # Hot leads only, as JSON, piped to jq
    leadgen score prospects.csv -f json -q --temperature hot | jq '.[:5]'

    # Only prospects inside the service radius, nearest first
    leadgen score prospects.csv --within-radius --sort-by distance

    # Distance between two points
    leadgen distance 47.1853 -122.2928 47.2529 -122.4598

    # Visit order for the day's prospects
    leadgen route prospects.json

    # Show effective configuration
    leadgen config
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .api import SORT_KEYS, ScoringRun, prepare_prospect, score_prospects
from .config import DEFAULT_BUSINESS_TYPES, ScoringConfig, load_config
from .constants import MESSAGES
from .export import export_csv_string, export_prospects
from .geo import (
    GeocodingError,
    build_geocoder,
    haversine_miles,
    plan_route,
)
from .ingest import ProspectParseError, UnsupportedFileTypeError, load_prospects
from .models import GeoPoint, ScoredProspect, Temperature
from .scoring import ProspectScorer, temperature_ranges

# Progress to stderr, data to stdout
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, quiet: bool, debug: bool) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def load_or_exit(input_file: str) -> list:
    """Load prospects, turning input errors into a message and exit code 1."""
    try:
        return load_prospects(input_file)
    except UnsupportedFileTypeError as e:
        console.print(f"[red]Unsupported input:[/red] {e}")
        sys.exit(1)
    except ProspectParseError as e:
        console.print(f"[red]Invalid prospect data:[/red] {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
        sys.exit(1)


def format_output(
    prospects: list[ScoredProspect],
    output_format: str,
    no_headers: bool = False,
) -> str:
    """Format scored prospects for output."""
    if output_format == "json":
        return json.dumps([p.to_dict() for p in prospects], indent=2, default=str)

    elif output_format == "jsonl":
        return "\n".join(json.dumps(p.to_dict(), default=str) for p in prospects)

    elif output_format in ("csv", "tsv"):
        delimiter = "\t" if output_format == "tsv" else ","
        return export_csv_string(prospects, delimiter=delimiter, headers=not no_headers)

    else:
        raise ValueError(f"Unknown format: {output_format}")


def display_summary(run: ScoringRun, top: int = 10) -> None:
    """Display a summary table of top prospects."""
    table = Table(title="Top Prospects", show_header=True, header_style="bold magenta")

    table.add_column("Business", style="cyan", max_width=30)
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Tier", justify="center")
    table.add_column("Miles", justify="right")
    table.add_column("Next Action", max_width=40)

    colours = {
        Temperature.HOT: "red",
        Temperature.WARM: "yellow",
        Temperature.COLD: "blue",
    }

    for p in run.prospects[:top]:
        colour = colours[p.temperature]
        miles = p.prospect.distance_miles
        table.add_row(
            p.prospect.business_name[:30],
            p.business_type.value,
            f"[{colour}]{p.score}[/{colour}]",
            f"[{colour}]{p.temperature.value}[/{colour}]",
            f"{miles:.1f}" if miles is not None else "-",
            p.next_action[:40],
        )

    console.print(table)

    metrics = run.metrics
    console.print(
        f"[dim]{metrics['hot_leads']} hot, {metrics['warm_leads']} warm, "
        f"{metrics['cold_leads']} cold - average score {metrics['average_score']}[/dim]"
    )


# ============================================================================
# CLI Group
# ============================================================================

@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """Lead scoring for backflow-testing prospects."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============================================================================
# Score Command
# ============================================================================

@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Output file (default: stdout)")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["csv", "json", "jsonl", "tsv"]),
              default="csv", help="Output format")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress, only emit data")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--no-headers", is_flag=True, help="Omit headers in CSV/TSV")
# Filtering
@click.option("--min-score", type=click.IntRange(0, 100), default=None, help="Minimum score")
@click.option("--temperature", type=click.Choice([t.value for t in Temperature]),
              default=None, help="Only this tier")
@click.option("--within-radius", is_flag=True, help="Drop prospects outside the service radius")
@click.option("-l", "--limit", type=click.IntRange(min=1), default=None, help="Max prospects to output")
@click.option("--sort-by", type=click.Choice(list(SORT_KEYS)), default=None, help="Sort order")
# Configuration
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("--offline", is_flag=True, help="Use the built-in city table for geocoding")
def score(
    input_file: str,
    output: Optional[str],
    output_format: str,
    quiet: bool,
    verbose: bool,
    debug: bool,
    no_headers: bool,
    min_score: Optional[int],
    temperature: Optional[str],
    within_radius: bool,
    limit: Optional[int],
    sort_by: Optional[str],
    config: Optional[str],
    offline: bool,
):
    """
    Score prospects from a JSON or CSV file.

    Output goes to stdout by default (use -o for file).
    Progress goes to stderr (use -q to suppress).

    Examples:

        leadgen score prospects.json

        leadgen score prospects.csv -f json -q --temperature hot
    """
    setup_logging(verbose, quiet, debug)

    settings = load_config(config)
    if within_radius:
        settings.enforce_radius = True

    prospects = load_or_exit(input_file)

    options = dict(
        settings=settings,
        min_score=min_score,
        temperature=Temperature(temperature) if temperature else None,
        sort_by=sort_by,
        limit=limit,
    )

    try:
        with build_geocoder(settings, offline=offline) as geocoder:
            if quiet:
                run = score_prospects(prospects, geocoder=geocoder, **options)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                ) as progress:
                    progress.add_task(f"[cyan]Scoring {len(prospects)} prospects...", total=None)
                    run = score_prospects(prospects, geocoder=geocoder, **options)
    except GeocodingError as e:
        console.print(f"[red]Geocoding error:[/red] {e}")
        sys.exit(1)

    if not quiet:
        console.print(f"[green]Scored:[/green] {run.total_processed} prospects")
        if run.outside_radius:
            console.print(f"[dim]{run.outside_radius} outside the {settings.service_radius_miles:g} mile radius[/dim]")
        if run.geocode_failures:
            console.print(f"[yellow]{run.geocode_failures} address(es) could not be geocoded[/yellow]")

    if not run.prospects:
        if not quiet:
            console.print(f"[yellow]{MESSAGES['no_prospects']}[/yellow]")
        sys.exit(1)

    if output:
        output_path = export_prospects(run.prospects, output, output_format)
        if not quiet:
            console.print(f"\n[green]Saved:[/green] {output_path}")
            display_summary(run)
    else:
        click.echo(format_output(run.prospects, output_format, no_headers))


# ============================================================================
# Distance Command
# ============================================================================

# Negative coordinates would otherwise parse as options
@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("lat1", type=float)
@click.argument("lng1", type=float)
@click.argument("lat2", type=float)
@click.argument("lng2", type=float)
def distance(lat1: float, lng1: float, lat2: float, lng2: float):
    """Great-circle distance in miles between two points."""
    miles = haversine_miles(GeoPoint(lat1, lng1), GeoPoint(lat2, lng2))
    click.echo(f"{miles:.2f}")


# ============================================================================
# Route Command
# ============================================================================

@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("--offline", is_flag=True, help="Use the built-in city table for geocoding")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json"]), default="table")
def route(input_file: str, config: Optional[str], offline: bool, output_format: str):
    """
    Plan a visit order for prospects, starting from the service centre.

    Uses nearest neighbour then 2-opt; prospects that cannot be located are
    listed separately.
    """
    settings = load_config(config)
    prospects = load_or_exit(input_file)
    scorer = ProspectScorer(service_center=settings.service_center)

    try:
        with build_geocoder(settings, offline=offline) as geocoder:
            prepared = [prepare_prospect(p, scorer, geocoder) for p in prospects]
    except GeocodingError as e:
        console.print(f"[red]Geocoding error:[/red] {e}")
        sys.exit(1)

    plan = plan_route(
        settings.service_center,
        prepared,
        locate=lambda p: p.coordinates,
        visit_minutes=settings.visit_minutes,
        minutes_per_mile=settings.minutes_per_mile,
    )

    if output_format == "json":
        click.echo(json.dumps(
            plan.to_dict(lambda p: {"business_name": p.business_name, "address": p.address}),
            indent=2,
        ))
        return

    table = Table(title="Visit Route", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Business", style="cyan", max_width=35)
    table.add_column("Address", max_width=40)
    table.add_column("Leg (mi)", justify="right")

    for i, (stop, miles) in enumerate(zip(plan.stops, plan.leg_miles), start=1):
        table.add_row(str(i), stop.business_name, stop.address, f"{miles:.1f}")

    console.print(table)
    console.print(
        f"[green]Total:[/green] {plan.total_miles:.1f} miles, "
        f"{plan.total_minutes // 60}h {plan.total_minutes % 60}m including visits"
    )
    for stop in plan.unrouted:
        console.print(f"[yellow]Not routed:[/yellow] {stop.business_name} ({stop.address or 'no address'})")


# ============================================================================
# Config Command
# ============================================================================

@cli.command("config")
@click.option("--config", "config_path", type=click.Path(exists=True), help="YAML config file")
def show_config(config_path: Optional[str]):
    """Show effective configuration."""
    settings = load_config(config_path)
    scoring = ScoringConfig()

    click.echo(f"Service centre: {settings.service_lat}, {settings.service_lng}")
    click.echo(f"Service radius: {settings.service_radius_miles:g} miles")
    if settings.geocoder_url:
        click.echo(f"✓ Geocoder: {settings.geocoder_url}")
    else:
        click.echo("✗ Geocoder: not configured (using built-in city table)")

    click.echo("\nBusiness types:")
    for profile in DEFAULT_BUSINESS_TYPES:
        click.echo(f"  {profile.business_type.value:<11} priority {profile.priority}")

    click.echo("\nTemperature ranges:")
    for tier, rng in temperature_ranges(scoring.thresholds).items():
        click.echo(f"  {tier:<5} {rng}")


# ============================================================================
# Version Command
# ============================================================================

@cli.command()
def version():
    """Show version info."""
    click.echo(f"backflow-leadgen {__version__}")


# ============================================================================
# Web Command
# ============================================================================

@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--port", default=8000, help="Port to bind to.")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development.")
def web(host: str, port: int, reload: bool) -> None:
    """Start the scoring API."""
    import uvicorn

    console.print(
        Panel.fit(
            f"[bold]Lead Scoring API[/bold]\n"
            f"Running at: [cyan]http://{host}:{port}[/cyan]",
            border_style="blue",
        )
    )
    console.print("Press Ctrl+C to stop\n")

    uvicorn.run(
        "leadgen.web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def main():
    cli()


if __name__ == "__main__":
    cli()
