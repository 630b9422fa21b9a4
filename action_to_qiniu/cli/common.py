"""Helpers shared by the CLI commands."""

import sys
from typing import NoReturn

import click

from ..exceptions import RelayError
from ..models.config import AppConfig
from ..utils.config_manager import ConfigManager


def fail(error: RelayError) -> NoReturn:
    """Print a fatal error and exit with its exit code."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(error.exit_code)


def load_app_config(config_path: str) -> AppConfig:
    """
    Load and validate the configuration file, exiting on failure.

    Args:
        config_path: Path given with --config

    Returns:
        Validated AppConfig
    """
    try:
        return ConfigManager(config_path).validate()
    except FileNotFoundError:
        click.echo(f"Error: Configuration file not found: {config_path}", err=True)
        click.echo("Create a config.json file or specify a different path with -c", err=True)
        sys.exit(1)
    except RelayError as e:
        fail(e)


__all__ = ["fail", "load_app_config"]
