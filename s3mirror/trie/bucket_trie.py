"""Trie reconstructing a directory hierarchy from flat bucket keys."""

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from ..path import BucketPath
from ..utils import DELIMITER, normalize_prefix
from .nodes import DirectoryNode, FileNode
from .printer import (
    ConsoleTriePrinter,
    DebugLogTriePrinter,
    TriePrinter,
    print_tree,
    render_tree,
)

logger = logging.getLogger(__name__)


class BucketTrie:
    """Tree of bucket keys split on "/".

    Interior segments become ``DirectoryNode``s and the last segment of each
    key becomes a ``FileNode`` holding the inserted value. A trie created
    with a prefix only accepts keys below that prefix and stores them
    relative to it; other keys are ignored.

    When an insertion collides with a node of the other kind, the newest
    insertion wins: a file standing where a directory is needed is replaced
    by a directory, and a directory standing where a file is inserted is
    replaced (with its whole subtree) by the file.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        system_printer: Optional[TriePrinter] = None,
        logger_printer: Optional[TriePrinter] = None,
    ):
        """Initialize an empty trie.

        Args:
            prefix: Optional key prefix scoping the trie
            system_printer: Sink used by print() (defaults to the console)
            logger_printer: Sink used by log() (defaults to a debug logger)
        """
        if prefix is not None and not normalize_prefix(prefix).strip():
            raise ValueError("prefix cannot be empty")
        self._prefix = normalize_prefix(prefix) if prefix is not None else None
        self._root = DirectoryNode()
        self.system_printer = system_printer or ConsoleTriePrinter()
        self.logger_printer = logger_printer or DebugLogTriePrinter(logger)

    @property
    def root(self) -> DirectoryNode:
        """Root directory node."""
        return self._root

    @property
    def prefix(self) -> Optional[str]:
        """Prefix scoping the trie, if any."""
        return self._prefix

    def _strip_prefix(self, key: str) -> Optional[str]:
        """Return the key relative to the prefix, or None if out of scope."""
        if self._prefix is None:
            return key
        normalized = normalize_prefix(key)
        if normalized == self._prefix:
            return ""
        scope = f"{self._prefix}{DELIMITER}"
        if not normalized.startswith(scope):
            return None
        return normalized[len(scope) :]

    def insert(self, key: str, value: str) -> None:
        """Insert a key and the value to store at its leaf.

        Args:
            key: "/"-delimited object key
            value: Non-empty value for the leaf (e.g. the object URL)

        Raises:
            TypeError: If key is None
            ValueError: If key is empty or value is empty
        """
        if key is None:
            raise TypeError("key cannot be None")
        if not key.strip():
            raise ValueError("key cannot be empty")

        relative_key = self._strip_prefix(key)
        if relative_key is None:
            logger.debug(
                "Given key [%s] does not begin with prefix [%s]", key, self._prefix
            )
            return
        if not relative_key:
            logger.debug("Given key [%s] is the prefix itself, ignoring", key)
            return

        segments = BucketPath(relative_key).segments
        file_node = FileNode(value)

        current = self._root
        for segment in segments[:-1]:
            child = current.children.get(segment)
            if isinstance(child, DirectoryNode):
                current = child
                continue
            if isinstance(child, FileNode):
                logger.warning(
                    "Replacing file [%s] with a directory while inserting [%s]",
                    segment,
                    key,
                )
            directory = DirectoryNode()
            current.children[segment] = directory
            current = directory

        leaf = segments[-1]
        existing = current.children.get(leaf)
        if isinstance(existing, DirectoryNode):
            logger.warning(
                "Replacing directory [%s] with a file while inserting [%s]",
                leaf,
                key,
            )
        current.children[leaf] = file_node

    def is_empty(self) -> bool:
        """Check whether nothing has been inserted."""
        return self._root.is_empty()

    def file_count(self) -> int:
        """Count the file leaves of the trie."""
        return sum(1 for _ in self.iter_files())

    def iter_files(self) -> Iterator[tuple[str, str]]:
        """Yield (relative key, value) for every file, in render order."""
        yield from _iter_files(self._root, BucketPath())

    def render(self) -> list[str]:
        """Render the trie as ASCII tree lines."""
        return render_tree(self._root)

    def print(self) -> None:
        """Print the trie to the console sink."""
        if self.is_empty():
            return
        print_tree(self._root, self.system_printer)

    def log(self) -> None:
        """Write the trie to the debug log sink."""
        if self.is_empty():
            return
        print_tree(self._root, self.logger_printer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BucketTrie):
            return NotImplemented
        return self._prefix == other._prefix and self._root == other._root

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BucketTrie(prefix={self._prefix!r}, files={self.file_count()})"


def _iter_files(
    directory: DirectoryNode, path: BucketPath
) -> Iterator[tuple[str, str]]:
    for name, node in directory.sorted_children():
        child_path = BucketPath(path).append(name)
        if isinstance(node, FileNode):
            yield child_path.as_string(), node.value
        else:
            yield from _iter_files(node, child_path)


class BucketTrieFactory:
    """Creates tries sharing one console printer and one debug-log printer."""

    def __init__(
        self,
        system_printer: Optional[TriePrinter] = None,
        logger_printer: Optional[TriePrinter] = None,
    ):
        self.system_printer = system_printer or ConsoleTriePrinter()
        self.logger_printer = logger_printer or DebugLogTriePrinter(
            logging.getLogger(__name__)
        )

    def create(self, prefix: Optional[str] = None) -> BucketTrie:
        """Create an empty trie.

        Args:
            prefix: Optional prefix; when given it must not be empty

        Returns:
            New BucketTrie
        """
        if prefix is not None and not prefix.strip():
            raise ValueError("prefix cannot be empty")
        return BucketTrie(prefix, self.system_printer, self.logger_printer)


def build_trie(
    entries: Iterable[tuple[str, str]],
    prefix: Optional[str] = None,
    factory: Optional[BucketTrieFactory] = None,
) -> BucketTrie:
    """Fold (key, value) pairs into a new trie.

    Args:
        entries: Pairs of object key and leaf value
        prefix: Optional prefix scoping the trie
        factory: Factory used to create the trie

    Returns:
        Populated BucketTrie
    """
    trie = (factory or BucketTrieFactory()).create(prefix)
    for key, value in entries:
        trie.insert(key, value)
    return trie
