"""
Validate command for action-to-qiniu CLI.

This module provides the validate command for checking a configuration file.
"""

import click

from ..utils import setup_logging
from .common import load_app_config


@click.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate the configuration file without running anything."""
    setup_logging(ctx.obj["debug"])

    config = load_app_config(ctx.obj["config"])
    click.echo("Configuration is valid")
    click.echo(f"  Bucket: {config.qiniu.bucket} (zone {config.qiniu.zone})")
    if config.artifacts.download and config.github is not None:
        click.echo(f"  Artifacts from: {config.github.owner}/{config.github.repo}")


__all__ = ["validate"]
