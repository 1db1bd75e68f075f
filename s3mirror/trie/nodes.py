"""Node types of the bucket trie.

A node is either a ``DirectoryNode`` (children, no value) or a ``FileNode``
(a value, never children). The two share no base class; code that walks a
trie matches on the concrete type.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class FileNode:
    """Leaf node holding the value of one object (e.g. its URL)."""

    value: str
    """Value stored for the object"""

    def __post_init__(self) -> None:
        if self.value is None:
            raise TypeError("value cannot be None")
        if not self.value.strip():
            raise ValueError("value cannot be empty")


@dataclass
class DirectoryNode:
    """Interior node keyed by child segment name."""

    children: dict[str, "TrieNode"] = field(default_factory=dict)
    """Child nodes by segment name"""

    def sorted_children(self) -> list[tuple[str, "TrieNode"]]:
        """Children in lexicographic order of their names."""
        return sorted(self.children.items(), key=lambda item: item[0])

    def is_empty(self) -> bool:
        """Check whether the directory has no children."""
        return not self.children


TrieNode = Union[DirectoryNode, FileNode]
