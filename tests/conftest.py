"""
Test fixtures and mock data for action-to-qiniu tests.

This module provides common fixtures, fake collaborators and utilities
for testing the action-to-qiniu package.
"""

import io
import json
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
import respx

from action_to_qiniu.models.api import PutFileResponse
from action_to_qiniu.models.artifacts import RemoteArtifact
from action_to_qiniu.models.config import AppConfig
from action_to_qiniu.models.context import RunContext

UPLOAD_HOST = "https://up.example.com"
API_URL = "https://api.github.test"


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock:
        yield respx


@pytest.fixture
def mock_config() -> Dict[str, Any]:
    """Raw configuration document as found in config.json."""
    return {
        "qiniu": {
            "accessKey": "test-access-key",
            "secretKey": "test-secret-key",
            "bucket": "test-bucket",
            "zone": "z0",
            "uploadHost": UPLOAD_HOST,
        },
        "github": {
            "token": "ghp_test",
            "owner": "octo",
            "repo": "site",
            "runId": 42,
            "artifactName": "dist",
            "apiUrl": API_URL,
        },
        "artifacts": {"download": False, "patterns": ["**/*"], "pathMapping": {}},
        "upload": {"cdnBasePath": "/", "overwrite": True, "cleanupAfterUpload": False},
        "options": {"verbose": True, "maxRetries": 0, "timeout": 30000},
    }


@pytest.fixture
def app_config(mock_config) -> AppConfig:
    """Validated configuration built from mock_config."""
    return AppConfig.model_validate(mock_config)


@pytest.fixture
def config_file(tmp_path, mock_config) -> Path:
    """Configuration written to a JSON file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(mock_config), encoding="utf-8")
    return path


@pytest.fixture
def run_context() -> RunContext:
    """Quiet sequential run context without retries."""
    return RunContext(verbose=False, max_workers=1, max_retries=0, timeout=10.0)


@pytest.fixture
def make_tree(tmp_path) -> Callable[..., Path]:
    """Factory creating a directory tree from a {relative path: content} mapping."""

    def _make_tree(files: Dict[str, str], root: Optional[Path] = None) -> Path:
        base = root or (tmp_path / "site")
        base.mkdir(parents=True, exist_ok=True)
        for relative_path, content in files.items():
            path = base / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return base

    return _make_tree


def make_zip(files: Dict[str, str]) -> bytes:
    """Build an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


class FakeStorage:
    """
    In-memory object storage.

    Keys listed in ``fail_keys`` raise the mapped exception on every
    attempt; ``flaky`` maps keys to a list of exceptions raised on the
    first attempts before succeeding.
    """

    def __init__(self, fail_keys: Optional[Dict[str, Exception]] = None, flaky: Optional[Dict[str, List[Exception]]] = None):
        self.fail_keys = fail_keys or {}
        self.flaky = {key: list(errors) for key, errors in (flaky or {}).items()}
        self.tokens: List[Dict[str, Any]] = []
        self.puts: List[str] = []
        self.stored: Dict[str, bytes] = {}

    def issue_upload_token(self, bucket: str, key: Optional[str] = None, ttl: int = 3600, insert_only: bool = False) -> str:
        self.tokens.append({"bucket": bucket, "key": key, "ttl": ttl, "insert_only": insert_only})
        return f"token-{len(self.tokens)}"

    def put_file(self, token: str, key: str, local_path: str) -> PutFileResponse:
        self.puts.append(key)
        if key in self.fail_keys:
            raise self.fail_keys[key]
        if self.flaky.get(key):
            raise self.flaky[key].pop(0)
        with open(local_path, "rb") as f:
            data = f.read()
        self.stored[key] = data
        return PutFileResponse(key=key, hash=f"hash-{len(data)}", fsize=len(data))


class FakeArtifactStore:
    """In-memory artifact store serving zip archives."""

    def __init__(self, archives: Dict[str, Dict[str, str]], created_at: Optional[datetime] = None):
        self.archives = archives
        self.created_at = created_at or datetime.now(timezone.utc)
        self.listed_runs: List[Optional[int]] = []
        self.url_requests: List[int] = []
        self.downloads: List[str] = []
        self._ids = {name: index for index, name in enumerate(archives, start=1)}

    def list_artifacts(self, run_id: Optional[int] = None) -> List[RemoteArtifact]:
        self.listed_runs.append(run_id)
        return [
            RemoteArtifact(id=artifact_id, name=name, created_at=self.created_at, size_bytes=100)
            for name, artifact_id in self._ids.items()
        ]

    def get_download_url(self, artifact_id: int) -> str:
        self.url_requests.append(artifact_id)
        return f"https://blob.example.com/{artifact_id}.zip"

    def download_archive(self, url: str, dest_path: str) -> int:
        self.downloads.append(url)
        artifact_id = int(url.rsplit("/", 1)[1].split(".")[0])
        name = next(name for name, index in self._ids.items() if index == artifact_id)
        data = make_zip(self.archives[name])
        with open(dest_path, "wb") as f:
            f.write(data)
        return len(data)


@pytest.fixture
def fake_storage() -> FakeStorage:
    """Object storage that accepts every upload."""
    return FakeStorage()


@pytest.fixture
def make_storage() -> Callable[..., FakeStorage]:
    """Factory for object storages with scripted failures."""
    return FakeStorage


@pytest.fixture
def make_artifact_store() -> Callable[..., FakeArtifactStore]:
    """Factory for artifact stores serving the given archives."""
    return FakeArtifactStore


@pytest.fixture
def zip_bytes() -> Callable[[Dict[str, str]], bytes]:
    """Factory for in-memory zip archives."""
    return make_zip
