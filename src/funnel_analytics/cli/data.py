"""data.py"""

import json
import os

import click

from funnel_analytics.cli.analytics import echo_response
from funnel_analytics.cli.client import APIClient
from funnel_analytics.engine import compute_overview
from funnel_analytics.store import EventStore


@click.group(name="data")
def data_cli():
    """Commands for event data operations."""


@data_cli.command(name="inspect")
@click.option("--infile", type=click.Path(exists=True), required=True)
def inspect_data(infile):
    """Summarize a local events file (JSON or Parquet)."""
    snapshot = EventStore(infile).snapshot()
    if not len(snapshot):
        raise click.UsageError(f"No events could be loaded from {infile}.")

    summary = compute_overview(snapshot.frame)
    click.echo(
        json.dumps(
            {
                "events": len(snapshot),
                "sessions": summary.sessions,
                "purchases": summary.purchases,
                "conversion_rate": summary.conversion_rate,
                "revenue": summary.revenue,
                "aov": summary.aov,
                "date_range": summary.date_range.model_dump(),
            },
            indent=2,
        )
    )


@data_cli.command(name="regenerate")
@click.option(
    "--token",
    default=lambda: os.getenv("SCHEDULER_TOKEN"),
    help="Scheduler token sent as a bearer token (defaults to $SCHEDULER_TOKEN).",
)
def regenerate(token):
    """Ask the server to regenerate its sample data."""
    client = APIClient()
    echo_response(lambda: client.regenerate_data(token))
