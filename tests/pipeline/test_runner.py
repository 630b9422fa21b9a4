"""
Tests for pipeline orchestration.
"""

import sys

import httpx
import pytest

from action_to_qiniu.exceptions import MissingCredentials, NoArtifactsFound, NoFilesMatched, TransformFailed
from action_to_qiniu.models import AppConfig
from action_to_qiniu.pipeline import process_artifacts, resolve_root


@pytest.fixture
def local_config(mock_config, make_tree):
    """Configuration selecting from a local working directory."""

    def _local_config(files, **sections):
        root = make_tree(files)
        document = dict(mock_config)
        document["processing"] = {"workingDirectory": str(root)}
        for name, values in sections.items():
            document[name] = {**document.get(name, {}), **values}
        return AppConfig.model_validate(document), root

    return _local_config


class TestResolveRoot:
    """Test resolve_root."""

    def test_working_directory(self, app_config, tmp_path):
        """Test a relative working directory is resolved against cwd."""
        app_config.processing.working_directory = "site"

        assert resolve_root(app_config, None, str(tmp_path)) == str(tmp_path / "site")

    def test_cwd_fallback(self, app_config, tmp_path):
        """Test that cwd is the root without other settings."""
        assert resolve_root(app_config, None, str(tmp_path)) == str(tmp_path)


class TestProcessArtifacts:
    """Test process_artifacts end to end with fake collaborators."""

    def test_static_site_keys(self, local_config, fake_storage, run_context):
        """Test keys for a mapped static site under a base path."""
        config, root = local_config(
            {"a.txt": "a", "b/c.txt": "c"},
            artifacts={"pathMapping": {"b/": "assets/"}},
            upload={"cdnBasePath": "/static"},
        )

        result = process_artifacts(config, run_context, storage=fake_storage)

        assert {f.key for f in result.uploaded.succeeded} == {"static/a.txt", "static/assets/c.txt"}
        assert result.uploaded.total_count == 2
        assert result.root == str(root)
        assert result.downloaded is None
        assert result.cleanup is None
        assert (root / "a.txt").exists()

    def test_no_files_matched(self, local_config, fake_storage, run_context):
        """Test that an empty selection fails before any upload."""
        config, _ = local_config({"a.txt": "a"}, artifacts={"patterns": ["**/*.png"]})

        with pytest.raises(NoFilesMatched):
            process_artifacts(config, run_context, storage=fake_storage)

        assert fake_storage.puts == []
        assert fake_storage.tokens == []

    def test_partial_failure_not_raised(self, local_config, make_storage, run_context):
        """Test that a failed upload is reported, not raised."""
        config, _ = local_config({"one.txt": "1", "two.txt": "2", "three.txt": "3"})
        storage = make_storage(fail_keys={"two.txt": httpx.ConnectError("reset")})

        result = process_artifacts(config, run_context, storage=storage)

        assert (result.uploaded.success_count, result.uploaded.failed_count) == (2, 1)
        assert result.uploaded.failed[0].relative_path == "two.txt"

    def test_cleanup_removes_every_selected_file(self, local_config, make_storage, run_context):
        """Test that cleanup also removes the local copy of a failed upload."""
        config, root = local_config({"one.txt": "1", "two.txt": "2"}, upload={"cleanupAfterUpload": True})
        storage = make_storage(fail_keys={"two.txt": httpx.ConnectError("reset")})

        result = process_artifacts(config, run_context, storage=storage)

        assert result.cleanup.removed_count == 2
        assert not (root / "one.txt").exists()
        assert not (root / "two.txt").exists()

    def test_cleanup_can_keep_failed_uploads(self, local_config, make_storage, run_context):
        """Test the preserve-failed-uploads policy."""
        config, root = local_config(
            {"one.txt": "1", "two.txt": "2"}, upload={"cleanupAfterUpload": True, "cleanupFailedUploads": False}
        )
        storage = make_storage(fail_keys={"two.txt": httpx.ConnectError("reset")})

        process_artifacts(config, run_context, storage=storage)

        assert not (root / "one.txt").exists()
        assert (root / "two.txt").exists()

    def test_cleanup_disabled_keeps_files(self, local_config, fake_storage, run_context):
        """Test that no selected file is removed without cleanup."""
        config, root = local_config({"one.txt": "1", "b/two.txt": "2"}, upload={"cleanupAfterUpload": False})

        process_artifacts(config, run_context, storage=fake_storage)

        assert (root / "one.txt").exists()
        assert (root / "b" / "two.txt").exists()

    def test_acquisition_then_upload(self, mock_config, tmp_path, make_artifact_store, fake_storage, run_context):
        """Test that downloaded artifacts become the selection root."""
        mock_config["artifacts"] = {"download": True, "downloadDir": "artifacts", "pathMapping": {"dist/": ""}}
        config = AppConfig.model_validate(mock_config)
        store = make_artifact_store({"dist": {"index.html": "<html>", "js/app.js": "x"}, "docs": {"a.md": "a"}})

        result = process_artifacts(config, run_context, artifact_store=store, storage=fake_storage, cwd=str(tmp_path))

        assert store.listed_runs == [42]
        assert result.root == str(tmp_path / "artifacts")
        assert result.downloaded.count == 1
        assert {f.key for f in result.uploaded.succeeded} == {"index.html", "js/app.js"}

    def test_name_filter_matches_nothing(self, mock_config, tmp_path, make_artifact_store, fake_storage, run_context):
        """Test that acquisition fails before any download or upload."""
        mock_config["artifacts"] = {"download": True, "downloadDir": "artifacts"}
        mock_config["github"]["artifactName"] = ["nightly"]
        config = AppConfig.model_validate(mock_config)
        store = make_artifact_store({"dist": {"a.txt": "a"}})

        with pytest.raises(NoArtifactsFound):
            process_artifacts(config, run_context, artifact_store=store, storage=fake_storage, cwd=str(tmp_path))

        assert store.downloads == []
        assert fake_storage.puts == []

    def test_download_without_github_section(self, mock_config, fake_storage, run_context):
        """Test that acquisition needs artifact store settings."""
        del mock_config["github"]
        mock_config["artifacts"] = {"download": True}
        config = AppConfig.model_validate(mock_config)

        with pytest.raises(MissingCredentials, match="GitHub"):
            process_artifacts(config, run_context, storage=fake_storage)

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell commands")
    def test_post_process_runs_before_selection(self, local_config, fake_storage, run_context):
        """Test that files created by the script are uploaded."""
        config, _ = local_config(
            {"src.txt": "s"}, processing={"postProcessScript": "cp src.txt built.txt"}
        )

        result = process_artifacts(config, run_context, storage=fake_storage)

        assert {f.key for f in result.uploaded.succeeded} == {"src.txt", "built.txt"}

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell commands")
    def test_post_process_failure_is_fatal(self, local_config, fake_storage, run_context):
        """Test that a failing script stops the run before any upload."""
        config, _ = local_config({"src.txt": "s"}, processing={"postProcessScript": "exit 1"})

        with pytest.raises(TransformFailed):
            process_artifacts(config, run_context, storage=fake_storage)

        assert fake_storage.puts == []

    def test_owned_clients_closed(self, local_config, mocker, run_context):
        """Test that clients built from the configuration are closed."""
        config, _ = local_config({"a.txt": "a"})
        client = mocker.MagicMock()
        client.issue_upload_token.return_value = "token"
        client.put_file.side_effect = RuntimeError("boom")
        mocker.patch("action_to_qiniu.pipeline.runner.QiniuUploadClient.from_config", return_value=client)

        result = process_artifacts(config, run_context)

        assert result.uploaded.failed_count == 1
        client.close.assert_called_once()
