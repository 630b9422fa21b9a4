"""
Collaborator protocols for type safety.

This module defines the interfaces the pipeline expects from the artifact
store and the object storage, so the stages can be driven by any client
with the same shape (the bundled clients, or fakes in tests).
"""

from typing import List, Optional, Protocol, runtime_checkable

from ..models.api import PutFileResponse
from ..models.artifacts import RemoteArtifact


@runtime_checkable
class ArtifactStoreProtocol(Protocol):
    """
    Protocol defining the interface for the artifact store.

    Fetch failures (rate limits, expired archives) surface as ordinary
    ``httpx.HTTPError`` exceptions.
    """

    def list_artifacts(self, run_id: Optional[int] = None) -> List[RemoteArtifact]:
        """
        List candidate artifacts.

        Args:
            run_id: Optional workflow run identifier

        Returns:
            List of RemoteArtifact
        """
        ...

    def get_download_url(self, artifact_id: int) -> str:
        """
        Resolve a temporary signed archive URL.

        Args:
            artifact_id: Artifact identifier

        Returns:
            Signed URL
        """
        ...

    def download_archive(self, url: str, dest_path: str) -> int:
        """
        Save an archive to disk.

        Args:
            url: Signed URL
            dest_path: File to write

        Returns:
            Number of bytes written
        """
        ...


@runtime_checkable
class ObjectStorageProtocol(Protocol):
    """
    Protocol defining the interface for the object storage.

    Rejected or unreachable uploads surface as ``StorageRequestFailed``.
    """

    def issue_upload_token(
        self,
        bucket: str,
        key: Optional[str] = None,
        ttl: int = 3600,
        insert_only: bool = False,
    ) -> str:
        """
        Issue a short-lived, scope-limited upload token.

        Args:
            bucket: Destination bucket
            key: Destination key
            ttl: Token lifetime in seconds
            insert_only: Refuse to replace existing keys

        Returns:
            Upload token
        """
        ...

    def put_file(self, token: str, key: str, local_path: str) -> PutFileResponse:
        """
        Upload a local file.

        Args:
            token: Upload token
            key: Destination key
            local_path: File to upload

        Returns:
            PutFileResponse with key, hash and size
        """
        ...


__all__ = ["ArtifactStoreProtocol", "ObjectStorageProtocol"]
