"""Unit tests for BucketPath."""

import pytest

from s3mirror.path import BucketPath


class TestBucketPathAppend:
    """Tests for BucketPath.append normalization."""

    def test_empty_path(self):
        """Test that a new path renders as an empty key."""
        path = BucketPath()
        assert path.as_string() == ""
        assert not path
        assert path.segments == ()

    def test_chained_appends(self):
        """Test that appends chain and join with slashes."""
        path = BucketPath().append("project").append("releases").append("1.0")
        assert path.as_string() == "project/releases/1.0"

    def test_backslashes_become_slashes(self):
        """Test that backslash separators are normalized."""
        assert BucketPath("a\\b\\c").as_string() == "a/b/c"

    def test_leading_and_trailing_delimiters_dropped(self):
        """Test that outer delimiters never reach the key."""
        assert BucketPath("/site/v1/").as_string() == "site/v1"

    def test_repeated_delimiters_collapse(self):
        """Test that runs of delimiters collapse into one."""
        assert BucketPath("a//b///c").as_string() == "a/b/c"

    def test_mixed_delimiters(self):
        """Test mixing slashes and backslashes."""
        path = BucketPath("root").append("\\sub/dir\\")
        assert path.as_string() == "root/sub/dir"
        assert path.segments == ("root", "sub", "dir")

    def test_append_returns_same_instance(self):
        """Test that append mutates and returns the path itself."""
        path = BucketPath("a")
        assert path.append("b") is path
        assert path.as_string() == "a/b"

    def test_append_none_raises(self):
        """Test that appending None is rejected."""
        with pytest.raises(TypeError):
            BucketPath().append(None)

    @pytest.mark.parametrize("raw", ["", "   ", "/", "//", "\\"])
    def test_append_empty_raises(self, raw):
        """Test that inputs without any segment are rejected."""
        with pytest.raises(ValueError):
            BucketPath().append(raw)

    def test_blank_segment_raises(self):
        """Test that a whitespace-only segment is rejected."""
        with pytest.raises(ValueError, match="blank segment"):
            BucketPath("a/ /b")

    def test_failed_append_leaves_path_unchanged(self):
        """Test that a rejected append does not modify the path."""
        path = BucketPath("a")
        with pytest.raises(ValueError):
            path.append("//")
        assert path.as_string() == "a"


class TestBucketPathCopy:
    """Tests for copying paths."""

    def test_copy_constructor_is_independent(self):
        """Test that deriving a child leaves the parent untouched."""
        parent = BucketPath("site")
        child = BucketPath(parent).append("index.html")
        assert parent.as_string() == "site"
        assert child.as_string() == "site/index.html"

    def test_copy_method(self):
        """Test the copy() helper."""
        path = BucketPath("a/b")
        copied = path.copy()
        copied.append("c")
        assert path.as_string() == "a/b"
        assert copied.as_string() == "a/b/c"


class TestBucketPathDunder:
    """Tests for equality, hashing and display."""

    def test_equality_on_segments(self):
        """Test that equivalent raw inputs produce equal paths."""
        assert BucketPath("a/b") == BucketPath("\\a\\b\\")
        assert BucketPath("a/b") != BucketPath("a/c")

    def test_hashable(self):
        """Test that equal paths hash the same."""
        assert len({BucketPath("a/b"), BucketPath("/a/b/")}) == 1

    def test_not_equal_to_string(self):
        """Test that paths do not compare equal to raw strings."""
        assert BucketPath("a") != "a"

    def test_str_and_repr(self):
        """Test string conversions."""
        path = BucketPath("a/b")
        assert str(path) == "a/b"
        assert repr(path) == "BucketPath('a/b')"

    def test_name(self):
        """Test the last segment accessor."""
        assert BucketPath("a/b/c.txt").name == "c.txt"
        assert BucketPath().name == ""
