"""
Best-effort removal of local files after distribution.

Cleanup never fails the run: files that cannot be removed are logged and
reported in the CleanupResult.
"""

import logging
import os
from typing import Iterable, List

from ..exceptions import CleanupFailed
from ..models.results import BatchResult, CleanupFailure, CleanupResult


def remove_file(path: str) -> None:
    """
    Remove one file. A file that is already gone counts as removed.

    Raises:
        CleanupFailed: If the file exists but cannot be removed
    """
    try:
        os.remove(path)
    except FileNotFoundError:
        logging.debug("Already removed: %s", path)
    except OSError as e:
        raise CleanupFailed(path, str(e)) from e


def cleanup_files(paths: Iterable[str], keep: Iterable[str] = ()) -> CleanupResult:
    """
    Remove local files, skipping the ones in ``keep``.

    Args:
        paths: Files to remove
        keep: Files to leave in place

    Returns:
        CleanupResult listing removed, skipped and failed paths
    """
    kept = set(keep)
    result = CleanupResult()
    for path in paths:
        if path in kept:
            result.skipped.append(path)
            continue
        try:
            remove_file(path)
        except CleanupFailed as e:
            logging.warning("%s", e)
            result.failed.append(CleanupFailure(path=e.path, reason=e.reason))
            continue
        result.removed.append(path)

    logging.debug(
        "Cleanup: %d removed, %d skipped, %d failed",
        len(result.removed),
        len(result.skipped),
        len(result.failed),
    )
    return result


def cleanup_paths(batch: BatchResult, cleanup_failed_uploads: bool) -> List[str]:
    """
    Pick the files a cleanup pass should remove.

    Args:
        batch: Result of the distribution pass
        cleanup_failed_uploads: Also remove files whose upload failed

    Returns:
        Local paths to remove
    """
    paths = [item.local_path for item in batch.succeeded]
    if cleanup_failed_uploads:
        paths.extend(item.local_path for item in batch.failed)
    return paths


def cleanup_batch(batch: BatchResult, cleanup_failed_uploads: bool = True) -> CleanupResult:
    """Remove the local files of a batch according to the cleanup policy."""
    keep = [] if cleanup_failed_uploads else [item.local_path for item in batch.failed]
    return cleanup_files([*cleanup_paths(batch, cleanup_failed_uploads), *keep], keep=keep)


__all__ = [
    "remove_file",
    "cleanup_files",
    "cleanup_paths",
    "cleanup_batch",
]
