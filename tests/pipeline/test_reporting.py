"""
Tests for run reporting.
"""

import logging
from datetime import datetime

import pytest

from action_to_qiniu.models import BatchResult, CleanupResult, DownloadedArtifact, DownloadResult, ProcessResult
from action_to_qiniu.models.results import CleanupFailure, FailedFile, UploadedFile
from action_to_qiniu.pipeline import format_bytes, generate_run_report, log_run_summary


@pytest.fixture
def result():
    """Run result with downloads, one failure and cleanup."""
    return ProcessResult(
        root="/w/artifacts",
        downloaded=DownloadResult(
            download_dir="/w/artifacts",
            files=[
                DownloadedArtifact(
                    name="dist", local_path="/w/artifacts/dist", created_at=datetime(2026, 10, 1, 12, 30), file_count=2
                )
            ],
        ),
        uploaded=BatchResult.from_outcomes(
            [
                UploadedFile(local_path="/w/a.txt", relative_path="dist/a.txt", key="static/a.txt", hash="h", size=1536),
                FailedFile(local_path="/w/b.txt", relative_path="dist/b.txt", key="static/b.txt", reason="HTTP 401"),
            ]
        ),
        cleanup=CleanupResult(removed=["/w/a.txt"], failed=[CleanupFailure(path="/w/b.txt", reason="busy")]),
    )


class TestFormatBytes:
    """Test format_bytes."""

    @pytest.mark.parametrize(
        "size,expected",
        [(0, "0 Bytes"), (100, "100 Bytes"), (1024, "1 KB"), (1536, "1.5 KB"), (5 * 1024**3, "5 GB")],
    )
    def test_format(self, size, expected):
        """Test human-readable sizes."""
        assert format_bytes(size) == expected


class TestGenerateRunReport:
    """Test generate_run_report."""

    def test_verbose_report(self, result):
        """Test the full per-file breakdown."""
        report = "\n".join(generate_run_report(result, verbose=True))

        assert "DOWNLOAD SUMMARY" in report
        assert "Artifacts: 1" in report
        assert "dist (created 2026-10-01 12:30)" in report
        assert "Total files: 2" in report
        assert "Successful: 1" in report
        assert "Failed: 1" in report
        assert "-> static/a.txt (1.5 KB)" in report
        assert "-> Error: HTTP 401" in report
        assert "Could not remove /w/b.txt: busy" in report
        assert "Completed with 1 failed upload(s)" in report

    def test_quiet_report(self, result):
        """Test that uploaded files are not listed when quiet but failures are."""
        report = "\n".join(generate_run_report(result, verbose=False))

        assert "static/a.txt" not in report
        assert "-> Error: HTTP 401" in report

    def test_without_download_or_cleanup(self):
        """Test a report for a local-only run."""
        local = ProcessResult(root="/w", uploaded=BatchResult())
        report = generate_run_report(local)

        assert "DOWNLOAD SUMMARY" not in report
        assert "CLEANUP SUMMARY" not in report
        assert report[-1] == "All operations completed!"


class TestLogRunSummary:
    """Test log_run_summary."""

    def test_failures_logged(self, result, caplog):
        """Test that the summary is always visible."""
        with caplog.at_level(logging.WARNING):
            log_run_summary(result)

        assert "1/2 file(s) uploaded (1 failed)" in caplog.text
        assert "Download complete: 1 artifact(s)" in caplog.text
