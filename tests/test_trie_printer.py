"""Tests for trie rendering and printer sinks."""

import io
import logging
from unittest.mock import Mock

import pytest
from rich.console import Console

from s3mirror.trie import (
    ConsoleTriePrinter,
    DebugLogTriePrinter,
    DirectoryNode,
    FileNode,
    print_tree,
    render_tree,
)


def _sample_root():
    return DirectoryNode(
        {
            "b": DirectoryNode(
                {
                    "d": DirectoryNode({"e.txt": FileNode("E")}),
                    "c.txt": FileNode("C"),
                }
            ),
            "a.txt": FileNode("A"),
            "z": DirectoryNode({"y.txt": FileNode("Y")}),
        }
    )


class TestRenderTree:
    """Tests for render_tree."""

    def test_empty_root(self):
        """Test that an empty root renders no lines."""
        assert render_tree(DirectoryNode()) == []

    def test_nested_indentation(self):
        """Test pipes under non-last ancestors and blanks under last ones."""
        assert render_tree(_sample_root()) == [
            "+--a.txt",
            "+--b/",
            "|  +--c.txt",
            "|  +--d/",
            "|     +--e.txt",
            "+--z/",
            "   +--y.txt",
        ]

    def test_empty_directory_rendered(self):
        """Test that a directory without children still gets a line."""
        root = DirectoryNode({"empty": DirectoryNode()})
        assert render_tree(root) == ["+--empty/"]

    def test_unknown_node_type_raises(self):
        """Test that only the two node kinds are accepted."""
        root = DirectoryNode({"bad": "not a node"})
        with pytest.raises(TypeError, match="Unknown trie node type"):
            render_tree(root)


class TestPrinters:
    """Tests for the printer sinks."""

    def test_print_tree_sends_each_line(self):
        """Test that print_tree writes one call per line."""
        printer = Mock()
        print_tree(_sample_root(), printer)
        assert printer.print.call_count == 7

    def test_console_printer(self):
        """Test that the console printer writes raw lines."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=200, color_system=None)
        printer = ConsoleTriePrinter(console)

        printer.print("|  +--[folder]/")

        assert buffer.getvalue() == "|  +--[folder]/\n"

    def test_debug_log_printer(self, caplog):
        """Test that the log printer writes at debug level."""
        logger = logging.getLogger("s3mirror.tests.printer")
        printer = DebugLogTriePrinter(logger)

        with caplog.at_level(logging.DEBUG, logger="s3mirror.tests.printer"):
            printer.print("+--a.txt")

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.DEBUG, "+--a.txt")
        ]

    def test_debug_log_printer_requires_logger(self):
        """Test that a logger is mandatory."""
        with pytest.raises(TypeError):
            DebugLogTriePrinter(None)
