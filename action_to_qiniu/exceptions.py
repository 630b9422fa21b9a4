"""
Exception taxonomy for artifact relay runs.

Fatal errors abort the run and carry the process exit code used by the CLI.
Per-file errors (UploadFailed, CleanupFailed) are raised inside a single file
attempt and converted into result entries by the batch that owns them; they
never escape a batch.
"""

from typing import Iterable, List, Optional, Sequence


class RelayError(Exception):
    """Base class for all errors raised by action-to-qiniu."""

    exit_code = 1
    fatal = True

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigInvalid(RelayError):
    """Configuration could not be loaded or failed schema validation."""

    def __init__(self, errors: Iterable[str], source: Optional[str] = None) -> None:
        self.errors: List[str] = list(errors)
        self.source = source
        where = f" ({source})" if source else ""
        details = "\n".join(f"  - {error}" for error in self.errors) or "  - Unknown validation error"
        super().__init__(f"Configuration validation failed{where}:\n{details}")


class MissingCredentials(RelayError):
    """Artifact store or object storage configuration is incomplete."""

    def __init__(self, service: str, missing: Sequence[str] = ()) -> None:
        self.service = service
        self.missing = list(missing)
        if self.missing:
            message = f"{service} configuration requires: {', '.join(self.missing)}"
        else:
            message = f"{service} configuration is required"
        super().__init__(message)


class NoArtifactsFound(RelayError):
    """The artifact listing (after name filtering) is empty."""

    def __init__(self, names: Optional[Sequence[str]] = None) -> None:
        self.names = list(names) if names else []
        if self.names:
            message = f"No artifacts found matching: {', '.join(self.names)}"
        else:
            message = "No artifacts found"
        super().__init__(message)


class AcquisitionFailed(RelayError):
    """Fetching or extracting an artifact failed. Fatal for the whole run."""

    def __init__(self, artifact: str, reason: str) -> None:
        self.artifact = artifact
        self.reason = reason
        super().__init__(f"Failed to acquire artifact {artifact}: {reason}")


class TransformFailed(RelayError):
    """The post-process command exited non-zero, timed out or could not start."""

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        timeout: Optional[float] = None,
        stderr: str = "",
        reason: Optional[str] = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.timeout = timeout
        self.stderr = stderr
        if timeout is not None:
            message = f"Post-processing script timed out after {timeout:g}s: {command}"
        elif reason is not None:
            message = f"Post-processing script could not be run ({reason}): {command}"
        else:
            message = f"Post-processing script failed with exit code {returncode}: {command}"
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)


class NoFilesMatched(RelayError):
    """No regular file under the root matched any inclusion pattern."""

    def __init__(self, root: str, patterns: Sequence[str]) -> None:
        self.root = root
        self.patterns = list(patterns)
        super().__init__(
            f"No files found matching the specified patterns ({', '.join(self.patterns)}) in {root}"
        )


class UploadFailed(RelayError):
    """A single file could not be uploaded. Recorded, never fatal."""

    fatal = False

    def __init__(self, local_path: str, key: str, reason: str, retryable: bool = False) -> None:
        self.local_path = local_path
        self.key = key
        self.reason = reason
        self.retryable = retryable
        super().__init__(f"Failed to upload {local_path} -> {key}: {reason}")


class StorageRequestFailed(RelayError):
    """The object storage rejected a request or could not be reached."""

    fatal = False

    def __init__(self, key: str, status_code: int, error: Optional[str] = None, retryable: bool = False) -> None:
        self.key = key
        self.status_code = status_code
        self.error = error
        self.retryable = retryable
        if status_code <= 0:
            self.reason = f"Network error: {error}" if error else "Network error"
        else:
            self.reason = f"HTTP {status_code}: {error}" if error else f"HTTP {status_code}"
        super().__init__(f"Upload of {key} failed ({self.reason})")


class CleanupFailed(RelayError):
    """A selected file could not be removed. Logged and collected only."""

    fatal = False

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not cleanup file {path}: {reason}")


class UploadErrorsPresent(RelayError):
    """Raised by the CLI when failed uploads must fail the process."""

    exit_code = 2

    def __init__(self, failed_count: int) -> None:
        self.failed_count = failed_count
        super().__init__(f"{failed_count} upload(s) failed")


__all__ = [
    "RelayError",
    "ConfigInvalid",
    "MissingCredentials",
    "NoArtifactsFound",
    "AcquisitionFailed",
    "TransformFailed",
    "NoFilesMatched",
    "UploadFailed",
    "StorageRequestFailed",
    "CleanupFailed",
    "UploadErrorsPresent",
]
