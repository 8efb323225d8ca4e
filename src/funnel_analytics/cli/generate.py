"""CLI commands for generating sample event data."""

import json

import click

from funnel_analytics.generator import EXPERIMENTS, generate_events, summarize_events
from funnel_analytics.store import write_events


@click.group("generate")
def generate_cli():
    """Generate sample data."""
    pass


@generate_cli.command("events")
@click.option(
    "--experiments",
    "num_experiments",
    default=len(EXPERIMENTS),
    type=click.IntRange(1, len(EXPERIMENTS)),
    help="Number of experiments to generate.",
)
@click.option("--sessions", default=2000, help="Sessions per experiment.")
@click.option("--users", default=500, help="Users per experiment.")
@click.option("--days", default=7, help="Number of days of data, ending today.")
@click.option("--seed", default=None, type=int, help="Random seed.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output file path, .json or .parquet (defaults to JSON on stdout).",
)
@click.option("--stats", is_flag=True, help="Print per-experiment statistics to stderr.")
def generate_event_data(
    num_experiments: int,
    sessions: int,
    users: int,
    days: int,
    seed,
    output,
    stats: bool,
):
    """Generate events for concurrently running experiments."""
    events = generate_events(
        num_sessions=sessions,
        num_users=users,
        days=days,
        experiments=EXPERIMENTS[:num_experiments],
        random_seed=seed,
    )

    if output:
        write_events(output, events)
        click.echo(f"Successfully generated {len(events)} events to {output}", err=True)
    else:
        records = [e.model_dump(exclude_none=True) for e in events]
        click.echo(json.dumps(records, indent=2))

    if stats:
        click.echo(json.dumps(summarize_events(events), indent=2), err=True)
