"""
Distribution of selected files to object storage.

Each file is uploaded independently: a failure is recorded against that
file and never stops the rest of the batch. Transient errors are retried
with exponential backoff before the file is given up on.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from ..exceptions import UploadFailed
from ..models.artifacts import UploadTarget
from ..models.config import UploadConfig
from ..models.context import RunContext
from ..models.results import BatchResult, FailedFile, FileOutcome, UploadedFile
from ..protocols import ObjectStorageProtocol
from ..utils.constants import RETRY_BACKOFF_FACTOR, RETRY_MAX_BACKOFF
from ..utils.error_handling import describe_error, is_retryable
from ..utils.logger import progress_level
from ..utils.path_mapping import PathMapper
from ..utils.selection import relative_posix_path


def build_upload_targets(files: Sequence[str], root: str, mapper: PathMapper) -> List[UploadTarget]:
    """
    Pair every selected file with its destination key.

    Args:
        files: Absolute paths produced by the selector
        root: Selection root
        mapper: Path mapper applied to each relative path

    Returns:
        Upload targets in selection order
    """
    targets = []
    for path in files:
        relative_path = relative_posix_path(path, root)
        targets.append(UploadTarget(local_path=path, relative_path=relative_path, key=mapper.map(relative_path)))
    return targets


def backoff_delay(attempt: int) -> float:
    """Delay before the retry following ``attempt`` (1-based)."""
    return min(RETRY_BACKOFF_FACTOR * (2 ** (attempt - 1)), RETRY_MAX_BACKOFF)


def _attempt_upload(
    storage: ObjectStorageProtocol, target: UploadTarget, bucket: str, upload_config: UploadConfig
) -> UploadedFile:
    """
    Make one upload attempt.

    Raises:
        UploadFailed: For any failure, flagged retryable for transient errors
    """
    try:
        # Overwrite tokens are scoped to the key; insert-only tokens to the bucket
        token = storage.issue_upload_token(
            bucket,
            key=target.key if upload_config.overwrite else None,
            ttl=upload_config.token_ttl,
            insert_only=not upload_config.overwrite,
        )
        response = storage.put_file(token, target.key, target.local_path)
        return UploadedFile(
            local_path=target.local_path,
            relative_path=target.relative_path,
            key=response.key or target.key,
            hash=response.hash,
            size=response.fsize,
        )
    except Exception as e:  # pylint: disable=broad-except
        logging.debug("Upload attempt for %s raised", target.local_path, exc_info=True)
        raise UploadFailed(target.local_path, target.key, describe_error(e), retryable=is_retryable(e)) from e


def upload_file(
    storage: ObjectStorageProtocol,
    target: UploadTarget,
    bucket: str,
    upload_config: UploadConfig,
    max_retries: int = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> FileOutcome:
    """
    Upload one file, retrying transient failures.

    Args:
        storage: Object storage client
        target: File and destination key
        bucket: Destination bucket
        upload_config: Upload settings (overwrite policy and token lifetime)
        max_retries: Extra attempts for retryable errors
        sleep: Function used to wait between attempts

    Returns:
        UploadedFile on success, FailedFile once attempts are exhausted or
        the error is not retryable
    """
    attempts = max_retries + 1
    attempt = 1
    while True:
        try:
            return _attempt_upload(storage, target, bucket, upload_config)
        except UploadFailed as e:
            if attempt < attempts and e.retryable:
                delay = backoff_delay(attempt)
                logging.info(
                    "Upload of %s failed (attempt %d/%d): %s, retrying in %.1fs",
                    target.relative_path,
                    attempt,
                    attempts,
                    e.reason,
                    delay,
                )
                sleep(delay)
                attempt += 1
                continue
            logging.error("Failed to upload %s: %s", target.relative_path, e.reason)
            return FailedFile(
                local_path=target.local_path,
                relative_path=target.relative_path,
                key=target.key,
                reason=e.reason,
                attempts=attempt,
            )


def upload_files(
    storage: ObjectStorageProtocol,
    targets: Sequence[UploadTarget],
    bucket: str,
    upload_config: UploadConfig,
    context: Optional[RunContext] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> BatchResult:
    """
    Upload a batch of files, isolating per-file failures.

    Uploads run on up to ``context.max_workers`` threads. Outcomes are
    collected in target order so results do not depend on scheduling.

    Args:
        storage: Object storage client
        targets: Files and destination keys
        bucket: Destination bucket
        upload_config: Upload settings
        context: Run context
        sleep: Function used to wait between retry attempts

    Returns:
        BatchResult with one outcome per target
    """
    context = context or RunContext()
    level = progress_level(context.verbose)
    total = len(targets)
    if total == 0:
        return BatchResult()

    logging.log(level, "Uploading %d file(s) to bucket %s", total, bucket)
    outcomes: List[FileOutcome] = []

    with ThreadPoolExecutor(thread_name_prefix="upload", max_workers=min(context.max_workers, total)) as executor:
        futures = [
            executor.submit(upload_file, storage, target, bucket, upload_config, context.max_retries, sleep)
            for target in targets
        ]
        for index, (target, future) in enumerate(zip(targets, futures), start=1):
            outcome = future.result()
            outcomes.append(outcome)
            if isinstance(outcome, UploadedFile):
                logging.log(level, "[%d/%d] Uploaded %s -> %s", index, total, target.relative_path, outcome.key)
            else:
                logging.log(level, "[%d/%d] Failed %s: %s", index, total, target.relative_path, outcome.reason)

    result = BatchResult.from_outcomes(outcomes)
    if result.has_failures:
        logging.warning("Upload: %d/%d successful (%d failed)", result.success_count, total, result.failed_count)
    else:
        logging.info("Upload: %d file(s) successful", result.success_count)
    return result


__all__ = [
    "build_upload_targets",
    "backoff_delay",
    "upload_file",
    "upload_files",
]
