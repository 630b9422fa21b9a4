"""
Pipeline stages for action-to-qiniu.

This package contains the stages of a relay run:
- download: Acquisition of artifacts from the artifact store
- process: Transform hook run before selection
- upload: Distribution of selected files to object storage
- cleanup: Best-effort removal of local files
- reporting: Run summary
- runner: Orchestration of a complete run
"""

from .cleanup import cleanup_batch, cleanup_files, cleanup_paths, remove_file
from .download import download_artifact, download_artifacts, filter_artifacts, latest_per_name
from .process import run_post_process_script
from .reporting import format_bytes, generate_run_report, log_run_summary
from .runner import process_artifacts, resolve_root
from .upload import backoff_delay, build_upload_targets, upload_file, upload_files

__all__ = [
    "cleanup_batch",
    "cleanup_files",
    "cleanup_paths",
    "remove_file",
    "download_artifact",
    "download_artifacts",
    "filter_artifacts",
    "latest_per_name",
    "run_post_process_script",
    "format_bytes",
    "generate_run_report",
    "log_run_summary",
    "process_artifacts",
    "resolve_root",
    "backoff_delay",
    "build_upload_targets",
    "upload_file",
    "upload_files",
]
