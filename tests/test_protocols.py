"""Tests for collaborator protocols."""

import inspect

from action_to_qiniu.api import GitHubArtifactClient, QiniuUploadClient
from action_to_qiniu.protocols import ArtifactStoreProtocol, ObjectStorageProtocol


def test_protocol_interfaces():
    """Test that the protocols define the expected methods."""
    assert hasattr(ArtifactStoreProtocol, "list_artifacts")
    assert hasattr(ArtifactStoreProtocol, "get_download_url")
    assert hasattr(ArtifactStoreProtocol, "download_archive")
    assert list(inspect.signature(ObjectStorageProtocol.put_file).parameters) == ["self", "token", "key", "local_path"]


def test_clients_satisfy_protocols():
    """Test that the real clients implement the protocols."""
    with GitHubArtifactClient("t", "o", "r") as store, QiniuUploadClient("ak", "sk") as storage:
        assert isinstance(store, ArtifactStoreProtocol)
        assert isinstance(storage, ObjectStorageProtocol)


def test_fakes_satisfy_protocols(make_storage, make_artifact_store):
    """Test that the test doubles stay in step with the protocols."""
    assert isinstance(make_storage(), ObjectStorageProtocol)
    assert isinstance(make_artifact_store({}), ArtifactStoreProtocol)


def test_unrelated_object_rejected():
    """Test that objects without the methods do not match."""
    assert not isinstance(object(), ObjectStorageProtocol)
