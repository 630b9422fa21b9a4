"""Artifact and file models for relay runs."""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from .api import ArtifactResponse
from .base import RelayBaseModel


class RemoteArtifact(RelayBaseModel):
    """
    Artifact listed by the artifact store.

    Attributes:
        id: Artifact identifier used to request its archive
        name: Artifact name
        created_at: Creation timestamp, when reported
        size_bytes: Archive size, when reported
        expired: Whether the store has already expired the archive
    """

    id: int
    name: str
    created_at: Optional[datetime] = None
    size_bytes: Optional[int] = None
    expired: bool = False

    @classmethod
    def from_response(cls, response: ArtifactResponse) -> "RemoteArtifact":
        """Build from a validated API response entry."""
        return cls(
            id=response.id,
            name=response.name,
            created_at=response.created_at,
            size_bytes=response.size_in_bytes,
            expired=response.expired,
        )


class DownloadedArtifact(RelayBaseModel):
    """
    Artifact fetched and extracted into the download root.

    Attributes:
        name: Artifact name
        local_path: Directory the archive was extracted into
        created_at: Creation timestamp reported by the store
        file_count: Number of files extracted
    """

    name: str
    local_path: str
    created_at: Optional[datetime] = None
    file_count: int = Field(default=0, ge=0)


class UploadTarget(RelayBaseModel):
    """
    A selected file paired with its destination key.

    Attributes:
        local_path: Absolute path of the selected file
        relative_path: Path relative to the selection root, forward slashes
        key: Destination key in the bucket
    """

    model_config = ConfigDict(frozen=True)

    local_path: str
    relative_path: str
    key: str


class DownloadResult(RelayBaseModel):
    """
    Result from the acquisition stage.

    Attributes:
        files: Artifacts downloaded and extracted, in processing order
        download_dir: Absolute download root
    """

    files: List[DownloadedArtifact] = Field(default_factory=list)
    download_dir: str

    @property
    def count(self) -> int:
        """Number of artifacts downloaded."""
        return len(self.files)

    @property
    def extracted_files(self) -> int:
        """Total number of files extracted across all artifacts."""
        return sum(artifact.file_count for artifact in self.files)


__all__ = [
    "RemoteArtifact",
    "DownloadedArtifact",
    "UploadTarget",
    "DownloadResult",
]
