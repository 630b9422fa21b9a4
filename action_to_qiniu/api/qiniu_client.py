"""
Object storage client for distributing files.

This module provides the client that issues upload tokens and performs
form uploads to a Qiniu Kodo bucket through the ``qiniu`` SDK.
"""

# Standard library imports
import logging
from typing import Any, Optional

# Third-party imports
from qiniu import Auth, Region, put_file

# Local imports
from ..exceptions import MissingCredentials, StorageRequestFailed
from ..models.api import PutFileResponse, UploadPolicy
from ..models.config import QiniuConfig
from ..utils.constants import DEFAULT_TOKEN_TTL, QINIU_UPLOAD_HOSTS, RETRY_STATUS_CODES, UPLOAD_RETURN_BODY


class QiniuUploadClient:
    """Client for uploading files to a Qiniu bucket."""

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        zone: str = "z0",
        upload_host: Optional[str] = None,
    ) -> None:
        """Initialize the upload client.

        Args:
            access_key: Storage access key
            secret_key: Storage secret key
            zone: Storage zone used to pick the upload host
            upload_host: Explicit upload host, overrides the zone lookup

        Raises:
            MissingCredentials: If a key is empty
            ValueError: If the zone is unknown and no upload host is given
        """
        missing = [name for name, value in (("accessKey", access_key), ("secretKey", secret_key)) if not value]
        if missing:
            raise MissingCredentials("Qiniu", missing)

        if upload_host is None:
            if zone not in QINIU_UPLOAD_HOSTS:
                raise ValueError(f"Unknown storage zone: {zone}")
            upload_host = QINIU_UPLOAD_HOSTS[zone]
        self.zone = zone
        self.upload_host = upload_host.rstrip("/")
        self.auth = Auth(access_key, secret_key)
        self.region = Region(up_host=self.upload_host)

    @classmethod
    def from_config(cls, config: QiniuConfig) -> "QiniuUploadClient":
        """Create a client from the ``qiniu`` configuration section."""
        return cls(config.access_key, config.secret_key, zone=config.zone, upload_host=config.upload_host)

    def issue_upload_token(
        self,
        bucket: str,
        key: Optional[str] = None,
        ttl: int = DEFAULT_TOKEN_TTL,
        insert_only: bool = False,
    ) -> str:
        """Issue a short-lived upload token.

        Overwriting an existing object requires the token scope to name the
        key; an insert-only token is scoped to the bucket and refuses to
        replace existing keys.

        Args:
            bucket: Destination bucket
            key: Destination key the token is scoped to when overwriting
            ttl: Token lifetime in seconds
            insert_only: Refuse to replace existing keys

        Returns:
            Signed upload token
        """
        scope_key = None if insert_only else key
        policy = UploadPolicy(insert_only=1 if insert_only else 0, return_body=UPLOAD_RETURN_BODY)
        logging.debug("Issuing upload token (bucket=%s, key=%s, ttl=%ds, insert_only=%s)", bucket, scope_key, ttl, insert_only)
        return self.auth.upload_token(bucket, scope_key, ttl, policy.to_policy())

    def put_file(self, token: str, key: str, local_path: str) -> PutFileResponse:
        """Upload a local file under a key.

        Args:
            token: Upload token issued for the bucket
            key: Destination key
            local_path: File to upload

        Returns:
            PutFileResponse with the stored key, content hash and size

        Raises:
            StorageRequestFailed: If the storage rejects the upload or cannot be reached
            pydantic.ValidationError: If the response body lacks required fields
            OSError: If the file cannot be read
        """
        logging.debug("Uploading %s to %s as %s", local_path, self.upload_host, key)
        ret, info = put_file(token, key, local_path, regions=[self.region])
        if info.status_code != 200:
            raise self._request_failed(key, info)
        return PutFileResponse.model_validate(ret)

    @staticmethod
    def _request_failed(key: str, info: Any) -> StorageRequestFailed:
        """Build the error for a failed upload from the SDK's response info."""
        if info.connect_failed():
            detail = str(info.exception) if info.exception is not None else info.error
            return StorageRequestFailed(key, -1, detail, retryable=True)
        return StorageRequestFailed(
            key,
            info.status_code,
            info.error,
            retryable=info.status_code in RETRY_STATUS_CODES,
        )

    def close(self) -> None:
        """Release client resources (the SDK keeps no per-client connections)."""
        logging.debug("Upload client closed")

    def __enter__(self) -> "QiniuUploadClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        """Context manager exit."""
        self.close()


__all__ = ["QiniuUploadClient"]
