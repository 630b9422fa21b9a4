"""
Run summary reporting.

Builds the human-readable summary printed at the end of a run: download
counts, upload success and failure counts and, when verbose, a per-file
breakdown with the failure reason of every failed file.
"""

import logging
from typing import List

from ..models.results import ProcessResult
from ..utils.constants import SEPARATOR_WIDTH

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: int, decimals: int = 2) -> str:
    """
    Format a byte count for display.

    Args:
        size: Number of bytes
        decimals: Decimal places kept

    Returns:
        Human-readable size, e.g. ``"1.5 KB"``

    Example:
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    index = 0
    value = float(size)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, decimals):g} {_SIZE_UNITS[index]}"


def _download_section(result: ProcessResult) -> List[str]:
    downloaded = result.downloaded
    if downloaded is None:
        return []

    lines = [
        "DOWNLOAD SUMMARY",
        f"   Artifacts: {downloaded.count}",
        f"   Location: {downloaded.download_dir}",
    ]
    if downloaded.files:
        lines.append("")
        lines.append("   Downloaded artifacts:")
        for index, artifact in enumerate(downloaded.files, start=1):
            created = f" (created {artifact.created_at:%Y-%m-%d %H:%M})" if artifact.created_at else ""
            lines.append(f"     {index}. {artifact.name}{created}")
            lines.append(f"       -> {artifact.local_path}")
    lines.append("-" * SEPARATOR_WIDTH)
    return lines


def _upload_section(result: ProcessResult, verbose: bool) -> List[str]:
    uploaded = result.uploaded
    lines = [
        "UPLOAD SUMMARY",
        f"   Total files: {uploaded.total_count}",
        f"   Successful: {uploaded.success_count}",
        f"   Failed: {uploaded.failed_count}",
    ]

    if verbose and uploaded.succeeded:
        lines.append("")
        lines.append("   Uploaded files:")
        for index, item in enumerate(uploaded.succeeded, start=1):
            lines.append(f"     {index}. {item.relative_path}")
            lines.append(f"       -> {item.key} ({format_bytes(item.size)})")

    # Failure reasons are always listed
    if uploaded.failed:
        lines.append("")
        lines.append("   Failed files:")
        for index, failure in enumerate(uploaded.failed, start=1):
            lines.append(f"     {index}. {failure.relative_path}")
            lines.append(f"       -> Error: {failure.reason}")
    return lines


def _cleanup_section(result: ProcessResult) -> List[str]:
    cleanup = result.cleanup
    if cleanup is None:
        return []

    lines = ["-" * SEPARATOR_WIDTH, "CLEANUP SUMMARY", f"   Removed: {cleanup.removed_count}"]
    if cleanup.skipped:
        lines.append(f"   Kept: {len(cleanup.skipped)}")
    for failure in cleanup.failed:
        lines.append(f"   Could not remove {failure.path}: {failure.reason}")
    return lines


def generate_run_report(result: ProcessResult, verbose: bool = True) -> List[str]:
    """
    Build the run summary.

    Args:
        result: Result of a complete run
        verbose: Include the per-file breakdown

    Returns:
        Report lines
    """
    lines = ["=" * SEPARATOR_WIDTH]
    lines.extend(_download_section(result))
    lines.extend(_upload_section(result, verbose))
    lines.extend(_cleanup_section(result))
    lines.append("=" * SEPARATOR_WIDTH)
    if result.uploaded.has_failures:
        lines.append(f"Completed with {result.uploaded.failed_count} failed upload(s)")
    else:
        lines.append("All operations completed!")
    return lines


def log_run_summary(result: ProcessResult) -> None:
    """Log the one-line run summary at WARNING level so it's always visible."""
    uploaded = result.uploaded
    if result.downloaded is not None:
        logging.warning(
            "Download complete: %d artifact(s) into %s", result.downloaded.count, result.downloaded.download_dir
        )
    if uploaded.has_failures:
        logging.warning(
            "Upload complete: %d/%d file(s) uploaded (%d failed)",
            uploaded.success_count,
            uploaded.total_count,
            uploaded.failed_count,
        )
    else:
        logging.warning(
            "Upload complete: %d file(s) uploaded (%s)", uploaded.success_count, format_bytes(uploaded.total_bytes)
        )


__all__ = [
    "format_bytes",
    "generate_run_report",
    "log_run_summary",
]
