"""Tests for the output formatter and upload recorder."""

import json

from s3mirror.models import UploadedObject, UploadRecorder
from s3mirror.output import OutputFormatter


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    def test_info_and_success(self, capsys):
        """Test that messages go to stdout."""
        out = OutputFormatter()
        out.info("hello [world]")
        out.success("done")

        captured = capsys.readouterr()
        assert "hello [world]" in captured.out
        assert "done" in captured.out

    def test_quiet_suppresses_info(self, capsys):
        """Test that quiet mode hides informational output."""
        out = OutputFormatter(quiet=True)
        out.info("hello")
        out.success("done")
        out.print("tree line")

        assert capsys.readouterr().out == "tree line\n"

    def test_warning_and_error_to_stderr(self, capsys):
        """Test that problems go to stderr even in quiet mode."""
        out = OutputFormatter(quiet=True)
        out.warning("careful")
        out.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Warning: careful" in captured.err
        assert "Error: broken" in captured.err

    def test_json_output(self, capsys):
        """Test that JSON output is parseable and text is suppressed."""
        out = OutputFormatter(json_output=True)
        out.info("not json")
        out.output_json({"url": "https://example.com/a", "count": 2})

        data = json.loads(capsys.readouterr().out)
        assert data == {"url": "https://example.com/a", "count": 2}

    def test_format_size(self):
        """Test size formatting."""
        assert OutputFormatter().format_size(2048) == "2.0 KB"


class TestUploadRecorder:
    """Tests for UploadRecorder."""

    def test_records_in_order(self):
        """Test that uploads keep their order and sizes add up."""
        recorder = UploadRecorder()
        recorder.record(UploadedObject("a", "https://x/a", 3))
        recorder.record(UploadedObject("b", "https://x/b", 4))

        assert [u.key for u in recorder.uploads] == ["a", "b"]
        assert recorder.total_bytes == 7
        assert len(recorder) == 2

    def test_callback(self):
        """Test that the callback receives each upload."""
        seen = []
        recorder = UploadRecorder(callback=seen.append)
        uploaded = UploadedObject("a", "https://x/a")

        recorder.record(uploaded)

        assert seen == [uploaded]
