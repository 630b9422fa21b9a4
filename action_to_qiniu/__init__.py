"""
action-to-qiniu - Relay GitHub Actions artifacts to Qiniu CDN.

This package downloads build artifacts from GitHub Actions, optionally
runs a post-processing command over them, and uploads the selected files
to a Qiniu bucket with per-file success and failure tracking.
"""

from ._version import __version__

__author__ = "action-to-qiniu contributors"

# Import main classes and functions for easy access
from .api import GitHubArtifactClient, QiniuUploadClient
from .exceptions import RelayError
from .models import AppConfig, BatchResult, ProcessResult, RunContext
from .pipeline import process_artifacts
from .utils import (
    PathMapper,
    create_session_with_retry,
    setup_logging,
    WrappingFormatter,
    get_logger,
    select_files,
)
from .utils.config_manager import ConfigManager, load_config
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "GitHubArtifactClient",
    "QiniuUploadClient",
    "RelayError",
    "AppConfig",
    "BatchResult",
    "ProcessResult",
    "RunContext",
    "process_artifacts",
    "PathMapper",
    "select_files",
    "setup_logging",
    "WrappingFormatter",
    "get_logger",
    "create_session_with_retry",
    "ConfigManager",
    "load_config",
    "cli_main",
    "cli_group",
]
