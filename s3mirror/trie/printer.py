"""Rendering of bucket tries as ASCII trees.

Siblings are visited in lexicographic order so that printed and logged
output are identical for the same trie contents::

    +--fileA.tmp
    +--folderA/
    |  +--fileB.tmp
    |  +--fileC.tmp
    +--folderB/
       +--fileD.tmp
"""

import logging
from typing import Optional, Protocol

from rich.console import Console

from ..utils import DELIMITER
from .nodes import DirectoryNode, FileNode, TrieNode

BRANCH = "+--"
PIPE_INDENT = "|  "
BLANK_INDENT = "   "


class TriePrinter(Protocol):
    """Line-oriented sink for rendered trie lines."""

    def print(self, line: str) -> None:
        """Write one line."""
        ...


class ConsoleTriePrinter:
    """Writes lines straight to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def print(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)


class DebugLogTriePrinter:
    """Writes lines to a logger at debug level."""

    def __init__(self, logger: logging.Logger):
        if logger is None:
            raise TypeError("logger cannot be None")
        self.logger = logger

    def print(self, line: str) -> None:
        self.logger.debug(line)


def _node_label(name: str, node: TrieNode) -> str:
    if isinstance(node, DirectoryNode):
        return f"{name}{DELIMITER}"
    if isinstance(node, FileNode):
        return name
    raise TypeError(f"Unknown trie node type: {type(node).__name__}")


def render_tree(root: DirectoryNode) -> list[str]:
    """Render all nodes below a root directory, one line per node.

    Args:
        root: Directory whose descendants are rendered (the root itself
            is not printed)

    Returns:
        Lines in depth-first pre-order
    """
    lines: list[str] = []
    _render_children(root, "", lines)
    return lines


def _render_children(directory: DirectoryNode, indent: str, lines: list[str]) -> None:
    children = directory.sorted_children()
    for index, (name, node) in enumerate(children):
        is_last = index == len(children) - 1
        lines.append(f"{indent}{BRANCH}{_node_label(name, node)}")
        if isinstance(node, DirectoryNode):
            child_indent = indent + (BLANK_INDENT if is_last else PIPE_INDENT)
            _render_children(node, child_indent, lines)


def print_tree(root: DirectoryNode, printer: TriePrinter) -> None:
    """Render a tree and send each line to a printer."""
    for line in render_tree(root):
        printer.print(line)
