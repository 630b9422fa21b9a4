"""
Pipeline orchestration.

Runs the stages of one relay strictly in order: acquisition, transform
hook, selection, key mapping, distribution and cleanup. Every stage gets
the run context explicitly.
"""

import logging
import os
from typing import Optional

from ..api.github_client import GitHubArtifactClient
from ..api.qiniu_client import QiniuUploadClient
from ..exceptions import MissingCredentials, NoFilesMatched
from ..models.artifacts import DownloadResult
from ..models.config import AppConfig
from ..models.context import RunContext
from ..models.results import ProcessResult
from ..protocols import ArtifactStoreProtocol, ObjectStorageProtocol
from ..utils.error_handling import with_error_handling
from ..utils.logger import progress_level
from ..utils.path_mapping import PathMapper
from ..utils.selection import select_files
from .cleanup import cleanup_batch
from .download import download_artifacts
from .process import run_post_process_script
from .upload import build_upload_targets, upload_files


def _absolute(path: str, cwd: str) -> str:
    return os.path.normpath(os.path.join(cwd, os.path.expanduser(path)))


def resolve_root(config: AppConfig, download: Optional[DownloadResult], cwd: str) -> str:
    """
    Resolve the directory files are selected from.

    Args:
        config: Validated configuration
        download: Acquisition result when acquisition ran
        cwd: Directory relative paths are resolved against

    Returns:
        Absolute selection root
    """
    if download is not None:
        return download.download_dir
    if config.processing.working_directory:
        return _absolute(config.processing.working_directory, cwd)
    return os.path.abspath(cwd)


@with_error_handling("artifact processing")
def process_artifacts(
    config: AppConfig,
    context: Optional[RunContext] = None,
    *,
    artifact_store: Optional[ArtifactStoreProtocol] = None,
    storage: Optional[ObjectStorageProtocol] = None,
    cwd: Optional[str] = None,
) -> ProcessResult:
    """
    Run the whole relay for one configuration.

    Clients are built from the configuration unless supplied; clients built
    here are closed before returning.

    Args:
        config: Validated configuration
        context: Run context (defaults to one derived from the configuration)
        artifact_store: Artifact store client to use instead of the configured one
        storage: Object storage client to use instead of the configured one
        cwd: Directory relative paths are resolved against (defaults to the current directory)

    Returns:
        ProcessResult of the run

    Raises:
        MissingCredentials: If acquisition is enabled without artifact store settings
        NoArtifactsFound: If acquisition finds nothing to download
        AcquisitionFailed: If an artifact cannot be acquired
        TransformFailed: If the post-process command fails
        NoFilesMatched: If the selection is empty
    """
    context = context or RunContext.from_config(config)
    cwd = cwd or os.getcwd()
    level = progress_level(context.verbose)

    if config.artifacts.download and config.github is None and artifact_store is None:
        raise MissingCredentials("GitHub", ["github"])

    owned = []
    try:
        # Storage credentials are checked before any download starts
        if storage is None:
            storage = QiniuUploadClient.from_config(config.qiniu)
            owned.append(storage)

        logging.log(level, "Starting artifact processing")
        download: Optional[DownloadResult] = None
        if config.artifacts.download:
            if artifact_store is None:
                artifact_store = GitHubArtifactClient.from_config(config.github)
                owned.append(artifact_store)
            logging.log(level, "Downloading artifacts")
            download = download_artifacts(
                artifact_store,
                _absolute(config.artifacts.download_dir, cwd),
                run_id=config.github.run_id if config.github else None,
                names=config.github.artifact_names if config.github else None,
                context=context,
            )

        root = resolve_root(config, download, cwd)

        script = config.processing.post_process_script
        if script:
            script_cwd = (
                _absolute(config.processing.working_directory, cwd) if config.processing.working_directory else root
            )
            run_post_process_script(script, script_cwd, context)

        files = select_files(root, config.artifacts.patterns)
        if not files:
            raise NoFilesMatched(root, config.artifacts.patterns)
        logging.log(level, "Found %d file(s) to upload from: %s", len(files), root)

        mapper = PathMapper(config.artifacts.path_mapping, config.upload.cdn_base_path)
        logging.debug("Key mapping: %r", mapper)
        targets = build_upload_targets(files, root, mapper)
        batch = upload_files(storage, targets, config.qiniu.bucket, config.upload, context)

        cleanup = None
        if config.upload.cleanup_after_upload:
            logging.log(level, "Cleaning up local files")
            cleanup = cleanup_batch(batch, config.upload.cleanup_failed_uploads)

        return ProcessResult(root=root, downloaded=download, uploaded=batch, cleanup=cleanup)
    finally:
        for client in owned:
            client.close()


__all__ = [
    "resolve_root",
    "process_artifacts",
]
