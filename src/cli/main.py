"""CLI commands for moodlog."""

import click

from cli.commands import analytics, classify, export, journal, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """moodlog - daily mood and productivity journal."""
    config = load_config_model()
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(
        json_mode=config.logging.json_mode, level=level, log_file=config.paths.log_file
    )


cli.add_command(journal)
cli.add_command(analytics)
cli.add_command(classify)
cli.add_command(export)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
