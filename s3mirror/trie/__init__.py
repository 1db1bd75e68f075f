"""Trie model for reconstructing bucket hierarchies from flat keys."""

from .bucket_trie import BucketTrie, BucketTrieFactory, build_trie
from .nodes import DirectoryNode, FileNode, TrieNode
from .printer import (
    ConsoleTriePrinter,
    DebugLogTriePrinter,
    TriePrinter,
    print_tree,
    render_tree,
)

__all__ = [
    "BucketTrie",
    "BucketTrieFactory",
    "build_trie",
    "DirectoryNode",
    "FileNode",
    "TrieNode",
    "TriePrinter",
    "ConsoleTriePrinter",
    "DebugLogTriePrinter",
    "print_tree",
    "render_tree",
]
