"""Main CLI command group."""

import logging

import click
import structlog

from funnel_analytics.cli.analytics import analytics_cli
from funnel_analytics.cli.data import data_cli
from funnel_analytics.cli.generate import generate_cli

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    """funnel-analytics command line interface."""
    # Only warnings and errors, so informational logs stay out of command output.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        cache_logger_on_first_use=False,
    )


cli.add_command(analytics_cli)
cli.add_command(data_cli)
cli.add_command(generate_cli)


def main():
    """CLI entrypoint."""
    cli()


if __name__ == "__main__":
    main()
