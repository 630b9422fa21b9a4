"""
Collaborator API clients.

This package provides clients for the two external services a run talks to:
- GitHub Actions artifact store (listing and archive download)
- Qiniu object storage (upload tokens and form upload via the qiniu SDK)
"""

from .github_client import GitHubArtifactClient
from .qiniu_client import QiniuUploadClient

# Import API models for convenience
from ..models.api import ArtifactResponse, ArtifactListResponse, PutFileResponse, UploadPolicy

__all__ = [
    "GitHubArtifactClient",
    "QiniuUploadClient",
    # API Models
    "ArtifactResponse",
    "ArtifactListResponse",
    "PutFileResponse",
    "UploadPolicy",
]
