"""CLI commands for querying the analytics API."""

import json
from typing import Callable

import click
import httpx

from funnel_analytics.cli.cli_types import IsoDate
from funnel_analytics.cli.client import APIClient
from funnel_analytics.schemas import CHANNELS, DEVICES


def echo_response(request: Callable[[], httpx.Response]) -> None:
    """Run an API request and print its JSON body, or the error on stderr."""
    try:
        response = request()
        click.echo(json.dumps(response.json(), indent=2))
    except httpx.HTTPStatusError as e:
        # Handle HTTP errors (e.g., 401 Unauthorized, 500 Internal Server Error)
        try:
            error_details = e.response.json()
        except json.JSONDecodeError:
            error_details = {
                "error": "Failed to decode server error response",
                "status_code": e.response.status_code,
                "response_text": e.response.text,
            }
        click.echo(json.dumps(error_details, indent=2), err=True)
    except httpx.RequestError as e:
        # Handle network errors (e.g., connection refused)
        error_message = {"error": "Failed to connect to API", "details": str(e)}
        click.echo(json.dumps(error_message, indent=2), err=True)


@click.group("analytics")
def analytics_cli():
    """Query funnel, A/B test, trend and overview reports."""
    pass


@analytics_cli.command("events")
@click.option("--page", default=1, help="Page number, starting at 1.")
@click.option("--limit", default=50, help="Events per page (at most 200).")
@click.option("--session-id", default=None, help="Only show events of this session.")
def list_events(page: int, limit: int, session_id):
    """List events as JSON, newest first."""
    client = APIClient()
    echo_response(lambda: client.list_events(page, limit, session_id))


@analytics_cli.command("funnel")
def funnel():
    """Show the conversion funnel."""
    client = APIClient()
    echo_response(client.get_funnel)


@analytics_cli.command("ab-test")
def ab_test():
    """Show per-experiment A/B test results."""
    client = APIClient()
    echo_response(client.get_ab_results)


@analytics_cli.command("trends")
def trends():
    """Show daily trends."""
    client = APIClient()
    echo_response(client.get_trends)


@analytics_cli.command("overview")
@click.option("--start-date", type=IsoDate(), help="First day to include.")
@click.option("--end-date", type=IsoDate(), help="Last day to include.")
@click.option("--device", type=click.Choice(DEVICES), help="Only this device.")
@click.option("--channel", type=click.Choice(CHANNELS), help="Only this channel.")
def overview(start_date, end_date, device, channel):
    """Show the overview summary with an hourly breakdown."""
    client = APIClient()
    echo_response(
        lambda: client.get_overview(
            start_date=start_date,
            end_date=end_date,
            device=device,
            channel=channel,
        )
    )
