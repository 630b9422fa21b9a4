"""
Pydantic models for action-to-qiniu.

This package contains all Pydantic models used in the application:
- api: Models for artifact store and object storage responses
- base, config, context, artifacts, results: Domain models
"""

# Collaborator API Response Models
from .api import (
    ApiBaseModel,
    ArtifactResponse,
    ArtifactListResponse,
    PutFileResponse,
    UploadPolicy,
)

# Domain Models
from .base import RelayBaseModel, CamelCaseModel
from .config import (
    AppConfig,
    ArtifactsConfig,
    GitHubConfig,
    OptionsConfig,
    ProcessingConfig,
    QiniuConfig,
    UploadConfig,
)
from .artifacts import DownloadedArtifact, DownloadResult, RemoteArtifact, UploadTarget
from .results import (
    BatchResult,
    CleanupFailure,
    CleanupResult,
    FailedFile,
    FileOutcome,
    ProcessResult,
    UploadedFile,
)
from .context import RunContext

__all__ = [
    # API Models
    "ApiBaseModel",
    "ArtifactResponse",
    "ArtifactListResponse",
    "PutFileResponse",
    "UploadPolicy",
    # Domain Models
    "RelayBaseModel",
    "CamelCaseModel",
    "AppConfig",
    "ArtifactsConfig",
    "GitHubConfig",
    "OptionsConfig",
    "ProcessingConfig",
    "QiniuConfig",
    "UploadConfig",
    "DownloadedArtifact",
    "DownloadResult",
    "RemoteArtifact",
    "UploadTarget",
    "BatchResult",
    "CleanupFailure",
    "CleanupResult",
    "FailedFile",
    "FileOutcome",
    "ProcessResult",
    "UploadedFile",
    "RunContext",
]
