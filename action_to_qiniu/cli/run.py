"""
Run command for action-to-qiniu CLI.

This module provides the run command: download artifacts, run the
post-process script, upload the selected files and print the summary.
"""

import json
import logging
import sys
from typing import Optional

import click

from ..exceptions import RelayError, UploadErrorsPresent
from ..models.context import RunContext
from ..pipeline import generate_run_report, log_run_summary, process_artifacts
from ..utils import setup_logging
from .common import fail, load_app_config


@click.command()
@click.option(
    "--results-json",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the run result as JSON to this path",
)
@click.option(
    "--fail-on-upload-error",
    is_flag=True,
    default=False,
    help="Exit with code 2 when any file failed to upload (default: upload.failOnError from the config)",
)
@click.pass_context
def run(ctx: click.Context, results_json: Optional[str], fail_on_upload_error: bool) -> None:
    """Download, post-process and upload artifacts to Qiniu."""
    # Get shared options from context
    config_path = ctx.obj["config"]
    debug = ctx.obj["debug"]

    setup_logging(debug)

    config = load_app_config(config_path)
    context = RunContext.from_config(
        config,
        verbose=ctx.obj["verbose"],
        max_workers=ctx.obj["max_workers"],
        debug=debug,
    )
    if context.verbose:
        click.echo(f"Loading configuration from: {config_path}")

    try:
        result = process_artifacts(config, context)
    except RelayError as e:
        fail(e)
    except Exception as e:  # pylint: disable=broad-except
        # Already logged by the pipeline
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for line in generate_run_report(result, verbose=context.verbose):
        click.echo(line)
    log_run_summary(result)

    if results_json:
        with open(results_json, "w", encoding="utf-8") as f:
            json.dump(result.to_json_dict(), f, indent=2)
        logging.info("Results written to %s", results_json)

    if result.uploaded.has_failures and (fail_on_upload_error or config.upload.fail_on_error):
        fail(UploadErrorsPresent(result.uploaded.failed_count))


__all__ = ["run"]
