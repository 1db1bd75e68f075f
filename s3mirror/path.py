"""Normalized "/"-delimited key paths for bucket objects."""

from typing import Optional, Union

from .utils import DELIMITER

_ALTERNATE_DELIMITERS = ("\\",)


class BucketPath:
    """An ordered sequence of non-empty key segments.

    Raw input is normalized on append: backslashes become "/", leading and
    trailing delimiters are dropped and runs of delimiters collapse. The
    rendered key never starts or ends with a delimiter.

    ``append`` extends the path in place and returns it for chaining. Copy a
    path before deriving a child from it so the parent is left untouched.

    Examples:
        >>> BucketPath().append("project").append("releases\\\\1.0").as_string()
        'project/releases/1.0'
        >>> parent = BucketPath("site")
        >>> child = BucketPath(parent).append("index.html")
        >>> parent.as_string(), child.as_string()
        ('site', 'site/index.html')
    """

    def __init__(self, path: Optional[Union["BucketPath", str]] = None):
        """Create a path.

        Args:
            path: Another BucketPath to deep-copy, or a raw string to append.
                None creates an empty path.
        """
        self._segments: list[str] = []
        if isinstance(path, BucketPath):
            self._segments = list(path._segments)
        elif path is not None:
            self.append(path)

    def append(self, path: str) -> "BucketPath":
        """Append a raw sub-path.

        Args:
            path: Raw path, may contain "/" or "\\" delimiters

        Returns:
            This path, for chaining

        Raises:
            TypeError: If path is None
            ValueError: If path is empty or consists only of delimiters
        """
        if path is None:
            raise TypeError("path cannot be None")
        if not path.strip():
            raise ValueError("path cannot be empty")

        normalized = path
        for alternate in _ALTERNATE_DELIMITERS:
            normalized = normalized.replace(alternate, DELIMITER)

        segments = [s for s in normalized.strip(DELIMITER).split(DELIMITER) if s]
        if not segments:
            raise ValueError(f"path contains no segments: {path!r}")
        for segment in segments:
            if not segment.strip():
                raise ValueError(f"path contains a blank segment: {path!r}")

        self._segments.extend(segments)
        return self

    def as_string(self) -> str:
        """Render the path as a "/"-joined key ("" for an empty path)."""
        return DELIMITER.join(self._segments)

    def copy(self) -> "BucketPath":
        """Return a deep copy of this path."""
        return BucketPath(self)

    @property
    def segments(self) -> tuple[str, ...]:
        """Segments of the path."""
        return tuple(self._segments)

    @property
    def name(self) -> str:
        """Last segment of the path, or "" when empty."""
        return self._segments[-1] if self._segments else ""

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BucketPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(tuple(self._segments))

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"BucketPath({self.as_string()!r})"
