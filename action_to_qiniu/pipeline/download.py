"""
Acquisition of artifacts from the artifact store.

This module lists the candidate artifacts, filters them by name and
fetches each archive into its own subdirectory of the download root.
Unlike distribution, acquisition is not partial-failure tolerant: the
first artifact that cannot be fetched or extracted aborts the run.
"""

import logging
import os
import tempfile
import traceback
import zipfile
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import httpx

from ..exceptions import AcquisitionFailed, NoArtifactsFound
from ..models.artifacts import DownloadedArtifact, DownloadResult, RemoteArtifact
from ..models.context import RunContext
from ..protocols import ArtifactStoreProtocol
from ..utils.constants import ARTIFACT_RETENTION_DAYS
from ..utils.error_handling import describe_error, handle_http_error
from ..utils.logger import progress_level


def filter_artifacts(artifacts: Sequence[RemoteArtifact], names: Optional[Sequence[str]]) -> List[RemoteArtifact]:
    """Keep the artifacts whose name is in the filter.

    Args:
        artifacts: Artifacts listed by the store
        names: Names to keep, or None to keep everything

    Returns:
        Filtered artifacts in listing order
    """
    if names is None:
        return list(artifacts)
    wanted = set(names)
    return [artifact for artifact in artifacts if artifact.name in wanted]


def latest_per_name(artifacts: Sequence[RemoteArtifact]) -> List[RemoteArtifact]:
    """Keep only the newest artifact of each name.

    Listings without a run id span every run of the repository, so the same
    name usually appears once per build. The newest entry wins; entries
    without a creation time keep the first one listed (the store lists
    newest first).

    Args:
        artifacts: Artifacts in listing order

    Returns:
        One artifact per name, in listing order
    """
    latest: Dict[str, RemoteArtifact] = {}
    for artifact in artifacts:
        current = latest.get(artifact.name)
        if current is None:
            latest[artifact.name] = artifact
        elif artifact.created_at and current.created_at and artifact.created_at > current.created_at:
            latest[artifact.name] = artifact

    kept = [artifact for artifact in artifacts if latest[artifact.name] is artifact]
    if len(kept) < len(artifacts):
        logging.info("Skipping %d older artifact(s) sharing a name with a newer one", len(artifacts) - len(kept))
    return kept


def _warn_if_stale(artifact: RemoteArtifact, now: Optional[datetime] = None) -> None:
    """Warn about artifacts the store has expired or is likely to have expired."""
    if artifact.expired:
        logging.warning("Artifact %s is marked as expired by the artifact store", artifact.name)
        return
    if artifact.created_at is None:
        return

    created_at = artifact.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    age_days = ((now or datetime.now(timezone.utc)) - created_at).total_seconds() / 86400
    if age_days > ARTIFACT_RETENTION_DAYS:
        logging.warning(
            "Artifact %s is %d days old (artifacts expire after %d days)",
            artifact.name,
            round(age_days),
            ARTIFACT_RETENTION_DAYS,
        )


def _extract_archive(zip_path: str, dest_dir: str) -> int:
    """Extract a zip archive and return the number of files it contained.

    Args:
        zip_path: Archive to extract
        dest_dir: Directory to extract into

    Returns:
        Number of file entries extracted
    """
    with zipfile.ZipFile(zip_path) as archive:
        # extractall drops absolute and parent components from member names
        archive.extractall(dest_dir)
        return sum(1 for info in archive.infolist() if not info.is_dir())


def download_artifact(
    store: ArtifactStoreProtocol, artifact: RemoteArtifact, download_dir: str
) -> DownloadedArtifact:
    """Fetch, extract and clean up one artifact archive.

    The archive is saved to a temporary file in ``download_dir``, extracted
    into ``<download_dir>/<name>/`` and removed afterwards, so archive
    members never collide with the archive itself.

    Args:
        store: Artifact store client
        artifact: Artifact to fetch
        download_dir: Absolute download root

    Returns:
        DownloadedArtifact describing the extracted directory

    Raises:
        AcquisitionFailed: If the archive cannot be fetched or extracted
    """
    artifact_dir = os.path.join(download_dir, artifact.name)
    zip_path = None

    try:
        download_url = store.get_download_url(artifact.id)
        logging.debug("Download URL obtained for %s", artifact.name)

        os.makedirs(artifact_dir, exist_ok=True)
        fd, zip_path = tempfile.mkstemp(prefix=f".{artifact.name}-", suffix=".zip", dir=download_dir)
        os.close(fd)
        try:
            size = store.download_archive(download_url, zip_path)
            logging.debug("Saved %s (%d bytes)", zip_path, size)
            file_count = _extract_archive(zip_path, artifact_dir)
        finally:
            os.remove(zip_path)
    except httpx.HTTPError as e:
        handle_http_error(e, f"download of artifact {artifact.name}")
        raise AcquisitionFailed(artifact.name, describe_error(e)) from e
    except zipfile.BadZipFile as e:
        logging.error("Failed to extract archive %s: %s", zip_path, e)
        raise AcquisitionFailed(artifact.name, f"Failed to extract archive: {e}") from e
    except (OSError, ValueError) as e:
        logging.error("Failed to acquire artifact %s: %s", artifact.name, e)
        logging.debug("Traceback: %s", traceback.format_exc())
        raise AcquisitionFailed(artifact.name, str(e)) from e

    return DownloadedArtifact(
        name=artifact.name,
        local_path=artifact_dir,
        created_at=artifact.created_at,
        file_count=file_count,
    )


def download_artifacts(
    store: ArtifactStoreProtocol,
    download_dir: str,
    *,
    run_id: Optional[int] = None,
    names: Optional[Sequence[str]] = None,
    context: Optional[RunContext] = None,
) -> DownloadResult:
    """List, filter and download artifacts into the download root.

    Args:
        store: Artifact store client
        download_dir: Directory artifacts are extracted into
        run_id: Optional workflow run to list artifacts from
        names: Optional artifact names to keep
        context: Run context

    Returns:
        DownloadResult with one entry per downloaded artifact

    Raises:
        NoArtifactsFound: If no artifact is left after filtering (nothing is downloaded)
        AcquisitionFailed: If listing fails or any artifact cannot be acquired
    """
    context = context or RunContext()
    level = progress_level(context.verbose)
    absolute_dir = os.path.abspath(download_dir)
    os.makedirs(absolute_dir, exist_ok=True)

    try:
        listed = store.list_artifacts(run_id)
    except httpx.HTTPError as e:
        handle_http_error(e, "artifact listing")
        raise AcquisitionFailed("<listing>", describe_error(e)) from e

    candidates = latest_per_name(filter_artifacts(listed, names))
    if not candidates:
        raise NoArtifactsFound(names)

    logging.log(level, "Found %d artifact(s) to download", len(candidates))
    downloaded: List[DownloadedArtifact] = []
    for index, artifact in enumerate(candidates, start=1):
        logging.log(level, "[%d/%d] Downloading artifact: %s", index, len(candidates), artifact.name)
        _warn_if_stale(artifact)
        result = download_artifact(store, artifact, absolute_dir)
        downloaded.append(result)
        logging.log(level, "[%d/%d] Extracted %d file(s) to %s", index, len(candidates), result.file_count, result.local_path)

    download_result = DownloadResult(files=downloaded, download_dir=absolute_dir)
    logging.info(
        "Downloaded %d artifact(s), %d file(s) extracted to %s",
        download_result.count,
        download_result.extracted_files,
        absolute_dir,
    )
    return download_result


__all__ = [
    "filter_artifacts",
    "latest_per_name",
    "download_artifact",
    "download_artifacts",
]
