import json
from typing import Optional

import typer

from sampler.domain.errors import SamplerError
from sampler.domain.geo import haversine_km
from sampler.domain.validation import STATISTICS_PAGES
from sampler.infra.database import resolve_engine
from sampler.jobs.event_reminders import run_event_reminders
from sampler.logging_config import configure_logging
from sampler.services.statistics import StatisticsService

app = typer.Typer(help="Operate the sampler functions from a shell")


@app.command("distance")
def cli_distance(
    from_lat: float = typer.Option(..., help="Origin latitude"),
    from_lon: float = typer.Option(..., help="Origin longitude"),
    to_lat: float = typer.Option(..., help="Destination latitude"),
    to_lon: float = typer.Option(..., help="Destination longitude"),
):
    typer.echo(f"{haversine_km(from_lat, from_lon, to_lat, to_lon):.3f} km")


@app.command("stats")
def cli_stats(
    page: str = typer.Option("dashboard", help="|".join(STATISTICS_PAGES)),
    database_url: Optional[str] = typer.Option(None, help="Overrides DATABASE_URL"),
):
    if page not in STATISTICS_PAGES:
        typer.echo(f"Invalid page {page!r}. Valid values: {', '.join(STATISTICS_PAGES)}", err=True)
        raise typer.Exit(code=2)
    configure_logging("WARNING")
    engine = resolve_engine(database_url=database_url)
    statistics = StatisticsService(engine).get_statistics(page)
    typer.echo(json.dumps(statistics, indent=2))


@app.command("reminders")
def cli_reminders(
    database_url: Optional[str] = typer.Option(None, help="Overrides DATABASE_URL"),
):
    configure_logging()
    try:
        run_event_reminders(database_url=database_url)
    except SamplerError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
