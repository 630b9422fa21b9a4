"""
Configuration schema for artifact relay runs.

The models describe the JSON configuration file (``config.json``): keys are
camelCase in the file and snake_case in Python. Validation failures are
reported field by field by
:class:`~action_to_qiniu.utils.config_manager.ConfigManager`.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import Field, field_validator

from .base import CamelCaseModel
from ..utils.constants import (
    DEFAULT_CDN_BASE_PATH,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PATTERNS,
    DEFAULT_SCRIPT_TIMEOUT_MS,
    DEFAULT_TOKEN_TTL,
    MAX_WORKERS_LIMIT,
)

QiniuZone = Literal["z0", "z1", "z2", "na0", "as0"]


class QiniuConfig(CamelCaseModel):
    """
    Object storage credentials and target bucket.

    Attributes:
        access_key: Qiniu access key
        secret_key: Qiniu secret key
        bucket: Destination bucket name
        zone: Storage region used to pick the upload host
        upload_host: Optional explicit upload host (overrides the zone lookup)
    """

    access_key: str = Field(min_length=1)
    secret_key: str = Field(min_length=1)
    bucket: str = Field(min_length=1)
    zone: QiniuZone = "z0"
    upload_host: Optional[str] = None


class GitHubConfig(CamelCaseModel):
    """
    Artifact store (GitHub Actions) access settings.

    Attributes:
        token: Token with ``actions:read`` permission
        owner: Repository owner
        repo: Repository name
        run_id: Optional workflow run to restrict the artifact listing to
        artifact_name: Optional artifact name or list of names to keep
        api_url: REST API root
    """

    token: str = Field(min_length=1)
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    run_id: Optional[int] = Field(default=None, gt=0)
    artifact_name: Optional[Union[str, List[str]]] = None
    api_url: str = DEFAULT_GITHUB_API_URL

    @property
    def artifact_names(self) -> Optional[List[str]]:
        """Artifact name filter as a list, or None when no filter is configured."""
        if self.artifact_name is None:
            return None
        if isinstance(self.artifact_name, str):
            return [self.artifact_name]
        return list(self.artifact_name)


class ArtifactsConfig(CamelCaseModel):
    """
    Acquisition and selection settings.

    Attributes:
        download: Fetch artifacts from the artifact store before uploading
        download_dir: Directory artifacts are extracted into
        patterns: Ordered glob-style inclusion patterns
        path_mapping: Ordered prefix -> replacement rewrite rules
    """

    download: bool = False
    download_dir: str = DEFAULT_DOWNLOAD_DIR
    patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_PATTERNS), min_length=1)
    path_mapping: Dict[str, str] = Field(default_factory=dict)

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Reject blank patterns."""
        blank = [index for index, pattern in enumerate(v) if not pattern.strip()]
        if blank:
            raise ValueError(f"Pattern(s) at position {', '.join(str(i) for i in blank)} must not be empty")
        return v

    @field_validator("path_mapping")
    @classmethod
    def validate_path_mapping(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Reject empty prefixes, which would match every path."""
        if "" in v:
            raise ValueError("Path mapping prefixes must not be empty")
        return v


class UploadConfig(CamelCaseModel):
    """
    Distribution settings.

    Attributes:
        cdn_base_path: Base path every destination key is joined under
        overwrite: Replace existing keys in the bucket
        cleanup_after_upload: Remove selected local files after the upload pass
        cleanup_failed_uploads: Also remove files whose upload failed
        fail_on_error: Exit non-zero when any upload failed
        token_ttl: Lifetime of each upload token in seconds
    """

    cdn_base_path: str = DEFAULT_CDN_BASE_PATH
    overwrite: bool = True
    cleanup_after_upload: bool = True
    cleanup_failed_uploads: bool = True
    fail_on_error: bool = False
    token_ttl: int = Field(default=DEFAULT_TOKEN_TTL, gt=0)


class ProcessingConfig(CamelCaseModel):
    """
    Transform hook settings.

    Attributes:
        post_process_script: Shell command run once before selection
        working_directory: Directory the command (and selection, without acquisition) runs in
    """

    post_process_script: Optional[str] = None
    working_directory: Optional[str] = None


class OptionsConfig(CamelCaseModel):
    """
    General run options.

    Attributes:
        verbose: Per-file reporting and surfaced command output
        max_retries: Extra attempts per file for transient upload errors
        timeout: Post-process command timeout in milliseconds
        max_workers: Concurrent uploads (1 = sequential)
    """

    verbose: bool = True
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, le=10)
    timeout: int = Field(default=DEFAULT_SCRIPT_TIMEOUT_MS, gt=0)
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=MAX_WORKERS_LIMIT)

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted to seconds."""
        return self.timeout / 1000


class AppConfig(CamelCaseModel):
    """Complete configuration document."""

    version: Optional[str] = None
    schema_: Optional[str] = Field(default=None, alias="$schema")
    qiniu: QiniuConfig
    github: Optional[GitHubConfig] = None
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    options: OptionsConfig = Field(default_factory=OptionsConfig)


__all__ = [
    "QiniuZone",
    "QiniuConfig",
    "GitHubConfig",
    "ArtifactsConfig",
    "UploadConfig",
    "ProcessingConfig",
    "OptionsConfig",
    "AppConfig",
]
