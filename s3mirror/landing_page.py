"""HTML landing pages for uploaded update sites."""

import html
import tempfile
from datetime import datetime
from importlib import resources
from pathlib import Path
from typing import Optional

from .trie import BucketTrie, DirectoryNode, FileNode

TEMPLATE_FILE = "landing_page.html"
HOW_TO_URL = (
    "http://help.eclipse.org/topic/org.eclipse.platform.doc.user/tasks/tasks-127.htm"
)
BANNER_FORMAT = "{bucket} Eclipse software repository"
MESSAGE_FORMAT = (
    "This URL is an Eclipse software repository for {project}, and must be used "
    'in Eclipse (<a href="{how_to}">See how</a>)'
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_BASE_INDENT = " " * 12
_INDENT_STEP = " " * 4


def _check_not_blank(value: Optional[str], name: str) -> None:
    if value is None:
        raise TypeError(f"{name} cannot be None")
    if not value.strip():
        raise ValueError(f"{name} cannot be empty")


def render_content(content: BucketTrie) -> str:
    """Render a trie as nested HTML lists.

    Files link to their stored value (the object URL); directories are
    rendered with a trailing "/". Siblings are sorted by name.
    """
    if content.is_empty():
        return f"{_BASE_INDENT}<p>No content.</p>"
    lines: list[str] = []
    _render_directory(content.root, _BASE_INDENT, lines)
    return "\n".join(lines)


def _render_directory(directory: DirectoryNode, indent: str, lines: list[str]) -> None:
    lines.append(f"{indent}<ul>")
    item_indent = indent + _INDENT_STEP
    for name, node in directory.sorted_children():
        escaped = html.escape(name)
        if isinstance(node, FileNode):
            href = html.escape(node.value, quote=True)
            lines.append(f'{item_indent}<li><a href="{href}">{escaped}</a></li>')
        else:
            lines.append(f"{item_indent}<li>{escaped}/")
            _render_directory(node, item_indent + _INDENT_STEP, lines)
            lines.append(f"{item_indent}</li>")
    lines.append(f"{indent}</ul>")


class LandingPageGenerator:
    """Generates the index.html page placed at the root of an uploaded site."""

    def __init__(self, template: Optional[str] = None):
        """Initialize the generator.

        Args:
            template: HTML template text; the packaged template is used
                when omitted
        """
        self._template = template

    def _read_template(self) -> str:
        if self._template is not None:
            return self._template
        return (
            resources.files("s3mirror")
            .joinpath("templates")
            .joinpath(TEMPLATE_FILE)
            .read_text(encoding="utf-8")
        )

    def create_contents(
        self,
        bucket: str,
        project_name: str,
        content: BucketTrie,
        date: datetime,
    ) -> str:
        """Fill the template for one site.

        Args:
            bucket: Bucket name, used as title and banner
            project_name: Project described by the page
            content: Trie of the uploaded objects
            date: Build timestamp

        Returns:
            HTML document
        """
        _check_not_blank(bucket, "bucket")
        _check_not_blank(project_name, "project_name")
        if content is None:
            raise TypeError("content cannot be None")
        if date is None:
            raise TypeError("date cannot be None")

        escaped_bucket = html.escape(bucket)
        message = MESSAGE_FORMAT.format(
            project=html.escape(project_name), how_to=HOW_TO_URL
        )
        return (
            self._read_template()
            .replace("{{title}}", escaped_bucket)
            .replace("{{banner}}", BANNER_FORMAT.format(bucket=escaped_bucket))
            .replace("{{message}}", message)
            .replace("{{content}}", render_content(content))
            .replace("{{timestamp}}", date.strftime(TIMESTAMP_FORMAT))
        )

    def generate(
        self,
        bucket: str,
        project_name: str,
        content: BucketTrie,
        date: datetime,
    ) -> Path:
        """Write the landing page to a temporary file.

        Returns:
            Path of the written index*.html file; the caller removes it

        Raises:
            OSError: If the file cannot be written
        """
        contents = self.create_contents(bucket, project_name, content, date)
        with tempfile.NamedTemporaryFile(
            "w", prefix="index", suffix=".html", delete=False, encoding="utf-8"
        ) as f:
            f.write(contents)
        return Path(f.name)
