"""
Unified CLI entry point for action-to-qiniu using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import run, validate
from .._version import __version__
from ..utils.constants import DEFAULT_CONFIG_PATH, MAX_WORKERS_LIMIT

# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="action-to-qiniu")
@click.option(
    "-c",
    "--config",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path to configuration file (JSON, or TOML with a .toml suffix)",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.option(
    "--verbose/--quiet",
    default=None,
    help="Show or hide per-file progress and script output (default: options.verbose from the config)",
)
@click.option(
    "--max-workers",
    type=click.IntRange(1, MAX_WORKERS_LIMIT),
    default=None,
    help="Maximum number of concurrent uploads (default: options.maxWorkers from the config)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: str,
    debug: int,
    verbose: Optional[bool],
    max_workers: Optional[int],
) -> None:
    """action-to-qiniu - Upload GitHub Actions artifacts to Qiniu CDN."""
    # Store shared options in context for subcommands to access
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["verbose"] = verbose
    ctx.obj["max_workers"] = max_workers


# Register subcommands
cli.add_command(run.run)
cli.add_command(validate.validate)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(130)


__all__ = ["cli", "main"]
