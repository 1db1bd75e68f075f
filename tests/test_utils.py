"""Unit tests for utility functions."""

from s3mirror.utils import as_directory_prefix, format_size, normalize_prefix


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        """Test sizes below one kilobyte."""
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        """Test kilobyte sizes."""
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        """Test megabyte sizes."""
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        """Test gigabyte sizes."""
        assert format_size(2 * 1024 * 1024 * 1024) == "2.0 GB"


class TestNormalizePrefix:
    """Tests for normalize_prefix function."""

    def test_strips_delimiters(self):
        """Test that outer slashes are removed."""
        assert normalize_prefix("/site/v1/") == "site/v1"

    def test_converts_backslashes(self):
        """Test that backslashes become slashes."""
        assert normalize_prefix("site\\v1") == "site/v1"

    def test_empty(self):
        """Test that an empty prefix stays empty."""
        assert normalize_prefix("") == ""
        assert normalize_prefix("/") == ""


class TestAsDirectoryPrefix:
    """Tests for as_directory_prefix function."""

    def test_adds_trailing_delimiter(self):
        """Test that a directory prefix ends with a slash."""
        assert as_directory_prefix("site/v1") == "site/v1/"

    def test_keeps_single_trailing_delimiter(self):
        """Test that an existing trailing slash is not doubled."""
        assert as_directory_prefix("site/v1/") == "site/v1/"

    def test_sibling_with_common_prefix_excluded(self):
        """Test that the prefix does not match a sibling directory."""
        prefix = as_directory_prefix("site/v1")
        assert not "site/v10/a.txt".startswith(prefix)
        assert "site/v1/a.txt".startswith(prefix)

    def test_empty(self):
        """Test that an empty prefix stays empty."""
        assert as_directory_prefix("") == ""
