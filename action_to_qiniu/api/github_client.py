"""
Artifact store client for GitHub Actions artifacts.

This module provides the client for listing workflow artifacts, resolving
their temporary signed archive URLs and streaming archives to disk.
"""

# Standard library imports
import logging
from typing import Any, List, Optional

# Third-party imports
import httpx

# Local imports
from ..exceptions import MissingCredentials
from ..models.api import ArtifactListResponse
from ..models.artifacts import RemoteArtifact
from ..models.config import GitHubConfig
from ..utils import create_session_with_retry
from ..utils.constants import (
    ARTIFACTS_PER_PAGE,
    DEFAULT_GITHUB_API_URL,
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_MAX_CHUNK_SIZE,
    DOWNLOAD_TIMEOUT,
    GITHUB_API_VERSION,
)

REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)


class GitHubArtifactClient:
    """Client for the GitHub Actions artifacts API."""

    def __init__(self, token: str, owner: str, repo: str, api_url: str = DEFAULT_GITHUB_API_URL) -> None:
        """Initialize the artifact client.

        Args:
            token: Token with ``actions:read`` permission
            owner: Repository owner
            repo: Repository name
            api_url: REST API root

        Raises:
            MissingCredentials: If token, owner or repo is empty
        """
        missing = [name for name, value in (("token", token), ("owner", owner), ("repo", repo)) if not value]
        if missing:
            raise MissingCredentials("GitHub", missing)

        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self._token = token
        self.session = self._create_session()
        # Signed archive URLs must be fetched without the API token
        self.download_session = create_session_with_retry(timeout=DOWNLOAD_TIMEOUT)

    @classmethod
    def from_config(cls, config: GitHubConfig) -> "GitHubArtifactClient":
        """Create a client from the ``github`` configuration section."""
        return cls(config.token, config.owner, config.repo, api_url=config.api_url)

    def _create_session(self) -> httpx.Client:
        """Create an authenticated httpx client for the REST API."""
        return create_session_with_retry(
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
        )

    @property
    def repository_url(self) -> str:
        """API URL of the configured repository."""
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    def list_artifacts(self, run_id: Optional[int] = None) -> List[RemoteArtifact]:
        """List artifacts of a workflow run, or of the whole repository.

        Follows ``Link: rel="next"`` pagination until every page is read.

        Args:
            run_id: Optional workflow run identifier

        Returns:
            List of RemoteArtifact in API order

        Raises:
            httpx.HTTPStatusError: If the API rejects the request
            pydantic.ValidationError: If a page has an unexpected shape
        """
        if run_id is not None:
            url: Optional[str] = f"{self.repository_url}/actions/runs/{run_id}/artifacts"
        else:
            url = f"{self.repository_url}/actions/artifacts"

        params: Optional[dict] = {"per_page": ARTIFACTS_PER_PAGE}
        artifacts: List[RemoteArtifact] = []
        while url:
            logging.debug("Listing artifacts: %s", url)
            response = self.session.get(url, params=params)
            response.raise_for_status()
            page = ArtifactListResponse.model_validate(response.json())
            artifacts.extend(RemoteArtifact.from_response(item) for item in page.artifacts)

            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None

        logging.debug("Listed %d artifact(s) for %s/%s", len(artifacts), self.owner, self.repo)
        return artifacts

    def get_download_url(self, artifact_id: int) -> str:
        """Resolve the temporary signed URL of an artifact's zip archive.

        Args:
            artifact_id: Artifact identifier

        Returns:
            Signed archive URL

        Raises:
            httpx.HTTPStatusError: If the API rejects the request (e.g. 410 for expired artifacts)
            ValueError: If the API answers without a redirect location
        """
        url = f"{self.repository_url}/actions/artifacts/{artifact_id}/zip"
        response = self.session.get(url, follow_redirects=False)
        if response.status_code in REDIRECT_STATUS_CODES and response.headers.get("location"):
            return response.headers["location"]

        response.raise_for_status()
        raise ValueError(f"No download location returned for artifact {artifact_id}")

    def download_archive(self, url: str, dest_path: str) -> int:
        """Stream an archive to a local file.

        Args:
            url: Signed archive URL
            dest_path: File to write

        Returns:
            Number of bytes written
        """
        written = 0
        with self.download_session.stream("GET", url) as response:
            response.raise_for_status()

            # Larger chunks for bigger archives, capped at 64KB
            chunk_size = DOWNLOAD_CHUNK_SIZE
            content_length = response.headers.get("content-length")
            if content_length:
                chunk_size = min(max(DOWNLOAD_CHUNK_SIZE, int(content_length) // 100), DOWNLOAD_MAX_CHUNK_SIZE)

            with open(dest_path, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=chunk_size):
                    f.write(chunk)
                    written += len(chunk)

        logging.debug("Saved %d bytes to %s", written, dest_path)
        return written

    def close(self) -> None:
        """Close the sessions and release all connections."""
        for session in (getattr(self, "session", None), getattr(self, "download_session", None)):
            if session:
                session.close()
        logging.debug("Artifact client sessions closed")

    def __enter__(self) -> "GitHubArtifactClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        """Context manager exit - ensures sessions are closed."""
        self.close()


__all__ = ["GitHubArtifactClient"]
