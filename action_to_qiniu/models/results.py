"""Result models for distribution, cleanup and whole runs."""

from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ConfigDict, Field, model_validator

from .artifacts import DownloadResult
from .base import RelayBaseModel


class UploadedFile(RelayBaseModel):
    """
    Outcome of a successful upload. Immutable once created.

    Attributes:
        local_path: Absolute path of the uploaded file
        relative_path: Path relative to the selection root
        key: Destination key reported by the storage
        hash: Content hash reported by the storage
        size: Size in bytes reported by the storage
    """

    model_config = ConfigDict(frozen=True)

    local_path: str
    relative_path: str
    key: str
    hash: str
    size: int = Field(ge=0)


class FailedFile(RelayBaseModel):
    """
    Outcome of a failed upload. Immutable once created.

    Attributes:
        local_path: Absolute path of the file
        relative_path: Path relative to the selection root
        key: Destination key the upload targeted
        reason: Human-readable failure reason
        attempts: Number of attempts made
    """

    model_config = ConfigDict(frozen=True)

    local_path: str
    relative_path: str
    key: str
    reason: str
    attempts: int = Field(default=1, ge=1)


FileOutcome = Union[UploadedFile, FailedFile]


class BatchResult(RelayBaseModel):
    """
    Aggregated outcomes of one distribution pass.

    ``total_count`` always equals ``success_count + failed_count`` and the
    number of files the selector produced.

    Example:
        >>> result = BatchResult.from_outcomes(outcomes)
        >>> result.success_count, result.failed_count
        (2, 1)
    """

    total_count: int = Field(default=0, ge=0)
    succeeded: List[UploadedFile] = Field(default_factory=list)
    failed: List[FailedFile] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_counts(self) -> "BatchResult":
        """Every selected file has exactly one outcome."""
        if self.total_count != len(self.succeeded) + len(self.failed):
            raise ValueError(
                f"total_count ({self.total_count}) must equal succeeded ({len(self.succeeded)}) "
                f"+ failed ({len(self.failed)})"
            )
        return self

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[FileOutcome]) -> "BatchResult":
        """Build a batch result from per-file outcomes."""
        succeeded: List[UploadedFile] = []
        failed: List[FailedFile] = []
        for outcome in outcomes:
            if isinstance(outcome, UploadedFile):
                succeeded.append(outcome)
            else:
                failed.append(outcome)
        return cls(total_count=len(succeeded) + len(failed), succeeded=succeeded, failed=failed)

    @property
    def success_count(self) -> int:
        """Number of files uploaded."""
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        """Number of files that failed."""
        return len(self.failed)

    @property
    def has_failures(self) -> bool:
        """Check if there were any failures."""
        return self.failed_count > 0

    @property
    def total_bytes(self) -> int:
        """Total bytes uploaded."""
        return sum(item.size for item in self.succeeded)


class CleanupFailure(RelayBaseModel):
    """A file the cleanup pass could not remove."""

    path: str
    reason: str


class CleanupResult(RelayBaseModel):
    """
    Result of the best-effort cleanup pass.

    Attributes:
        removed: Paths removed
        skipped: Paths intentionally kept (failed uploads, when configured)
        failed: Paths that could not be removed
    """

    removed: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    failed: List[CleanupFailure] = Field(default_factory=list)

    @property
    def removed_count(self) -> int:
        """Number of files removed."""
        return len(self.removed)

    @property
    def has_failures(self) -> bool:
        """Check if any removal failed."""
        return len(self.failed) > 0


class ProcessResult(RelayBaseModel):
    """
    Result of a complete run.

    Attributes:
        root: Directory files were selected from
        downloaded: Acquisition result when acquisition ran
        uploaded: Distribution batch result
        cleanup: Cleanup result when cleanup ran
    """

    root: str
    downloaded: Optional[DownloadResult] = None
    uploaded: BatchResult
    cleanup: Optional[CleanupResult] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """
        Export the run result for a results JSON file.

        Returns:
            Dictionary with camelCase keys, as consumed by CI workflow steps
        """
        result: Dict[str, Any] = {
            "uploaded": {
                "totalCount": self.uploaded.total_count,
                "successCount": self.uploaded.success_count,
                "failedCount": self.uploaded.failed_count,
                "files": [
                    {
                        "local": item.relative_path,
                        "remote": item.key,
                        "key": item.key,
                        "hash": item.hash,
                        "size": item.size,
                    }
                    for item in self.uploaded.succeeded
                ],
                "failedFiles": [
                    {"local": item.relative_path, "remote": item.key, "error": item.reason}
                    for item in self.uploaded.failed
                ],
            }
        }
        if self.downloaded is not None:
            result["downloaded"] = {
                "count": self.downloaded.count,
                "downloadDir": self.downloaded.download_dir,
                "files": [
                    {
                        "name": artifact.name,
                        "path": artifact.local_path,
                        "createdAt": artifact.created_at.isoformat() if artifact.created_at else None,
                    }
                    for artifact in self.downloaded.files
                ],
            }
        if self.cleanup is not None:
            result["cleanup"] = {
                "removed": len(self.cleanup.removed),
                "skipped": len(self.cleanup.skipped),
                "failed": [{"path": item.path, "error": item.reason} for item in self.cleanup.failed],
            }
        return result


__all__ = [
    "UploadedFile",
    "FailedFile",
    "FileOutcome",
    "BatchResult",
    "CleanupFailure",
    "CleanupResult",
    "ProcessResult",
]
