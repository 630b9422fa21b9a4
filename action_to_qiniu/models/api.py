"""
Pydantic models for collaborator API responses.

Responses from the artifact store and the object storage are validated here,
at the client boundary, so the pipeline only ever sees explicit structs with
their required fields present.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Base Models
# ============================================================================


class ApiBaseModel(BaseModel):
    """Base model for all collaborator API responses."""

    model_config = ConfigDict(extra="allow")  # Allow extra fields from API


# ============================================================================
# Artifact Store Models
# ============================================================================


class ArtifactResponse(ApiBaseModel):
    """Single artifact entry from the Actions artifacts API."""

    id: int
    name: str
    size_in_bytes: Optional[int] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    expired: bool = False
    archive_download_url: Optional[str] = None


class ArtifactListResponse(ApiBaseModel):
    """Paginated artifact listing."""

    total_count: int = 0
    artifacts: List[ArtifactResponse] = Field(default_factory=list)


# ============================================================================
# Object Storage Models
# ============================================================================


class PutFileResponse(ApiBaseModel):
    """Body returned by a successful form upload."""

    key: str
    hash: str
    fsize: int = Field(ge=0)


class UploadPolicy(BaseModel):
    """Policy fields added to an upload token beyond its scope and deadline."""

    model_config = ConfigDict(populate_by_name=True)

    insert_only: int = Field(default=0, alias="insertOnly")
    return_body: Optional[str] = Field(default=None, alias="returnBody")

    def to_policy(self) -> Dict[str, Any]:
        """Return the policy dict in the storage provider's field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    "ApiBaseModel",
    "ArtifactResponse",
    "ArtifactListResponse",
    "PutFileResponse",
    "UploadPolicy",
]
