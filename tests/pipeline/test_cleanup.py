"""
Tests for the cleanup stage.
"""

import logging
import os

import pytest

from action_to_qiniu.exceptions import CleanupFailed
from action_to_qiniu.models import BatchResult
from action_to_qiniu.models.results import FailedFile, UploadedFile
from action_to_qiniu.pipeline import cleanup_batch, cleanup_files, cleanup_paths, remove_file


@pytest.fixture
def batch(make_tree):
    """Batch with two uploaded files and one failed file, all on disk."""
    root = make_tree({"a.txt": "a", "b.txt": "b", "c.txt": "c"})
    return BatchResult.from_outcomes(
        [
            UploadedFile(local_path=str(root / "a.txt"), relative_path="a.txt", key="a.txt", hash="h", size=1),
            FailedFile(local_path=str(root / "b.txt"), relative_path="b.txt", key="b.txt", reason="HTTP 401"),
            UploadedFile(local_path=str(root / "c.txt"), relative_path="c.txt", key="c.txt", hash="h", size=1),
        ]
    )


class TestCleanupFiles:
    """Test cleanup_files."""

    def test_removes_files(self, make_tree):
        """Test that listed files are removed."""
        root = make_tree({"a.txt": "a", "b/c.txt": "c"})
        paths = [str(root / "a.txt"), str(root / "b" / "c.txt")]

        result = cleanup_files(paths)

        assert result.removed == paths
        assert not any(os.path.exists(path) for path in paths)

    def test_already_removed(self, tmp_path):
        """Test that a missing file counts as removed."""
        result = cleanup_files([str(tmp_path / "gone.txt")])

        assert result.removed_count == 1
        assert not result.has_failures

    def test_keep(self, make_tree):
        """Test that kept files are skipped."""
        root = make_tree({"a.txt": "a", "b.txt": "b"})

        result = cleanup_files([str(root / "a.txt"), str(root / "b.txt")], keep=[str(root / "b.txt")])

        assert result.skipped == [str(root / "b.txt")]
        assert (root / "b.txt").exists()

    def test_removal_failure_collected(self, make_tree, mocker, caplog):
        """Test that removal errors are logged and collected, not raised."""
        root = make_tree({"a.txt": "a", "b.txt": "b"})
        real_remove = os.remove

        def flaky_remove(path):
            if path.endswith("a.txt"):
                raise PermissionError("read-only filesystem")
            real_remove(path)

        mocker.patch("action_to_qiniu.pipeline.cleanup.os.remove", side_effect=flaky_remove)

        with caplog.at_level(logging.WARNING):
            result = cleanup_files([str(root / "a.txt"), str(root / "b.txt")])

        assert result.removed == [str(root / "b.txt")]
        assert result.failed[0].path == str(root / "a.txt")
        assert "read-only filesystem" in result.failed[0].reason
        assert "read-only filesystem" in caplog.text

    def test_remove_file_raises_cleanup_failed(self, mocker):
        """Test that remove_file wraps OS errors."""
        mocker.patch("action_to_qiniu.pipeline.cleanup.os.remove", side_effect=IsADirectoryError("is a directory"))

        with pytest.raises(CleanupFailed, match="is a directory"):
            remove_file("/w/dir")


class TestCleanupBatch:
    """Test cleanup of a distribution batch."""

    def test_removes_failed_uploads_by_default(self, batch):
        """Test that every selected file is removed, failed uploads included."""
        result = cleanup_batch(batch)

        assert result.removed_count == 3
        for item in [*batch.succeeded, *batch.failed]:
            assert not os.path.exists(item.local_path)

    def test_keeps_failed_uploads(self, batch):
        """Test that failed uploads can be preserved for a retry."""
        result = cleanup_batch(batch, cleanup_failed_uploads=False)

        assert result.removed_count == 2
        assert result.skipped == [batch.failed[0].local_path]
        assert os.path.exists(batch.failed[0].local_path)

    def test_cleanup_paths(self, batch):
        """Test path selection for both policies."""
        assert len(cleanup_paths(batch, True)) == 3
        assert len(cleanup_paths(batch, False)) == 2
