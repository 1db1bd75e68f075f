"""Mirroring of a local directory tree into a bucket prefix."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .models import UploadedObject, UploadRecorder
from .path import BucketPath
from .repository import BucketRepository
from .trie import BucketTrie, BucketTrieFactory, build_trie

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    """Phases of a synchronization run."""

    IDLE = "idle"
    """Nothing has happened yet"""

    DELETING_EXISTING = "deleting_existing"
    """Removing the previous contents of the destination prefix"""

    WALKING = "walking"
    """Uploading the local tree"""

    DONE = "done"
    """Run finished (possibly with per-file failures)"""


@dataclass
class SyncResult:
    """Outcome of a synchronization run."""

    destination: BucketPath
    """Destination prefix"""

    url: Optional[str] = None
    """URL of the destination prefix (None if nothing was walked)"""

    uploads: list[UploadedObject] = field(default_factory=list)
    """Objects uploaded, in walk order"""

    deleted: int = 0
    """Number of stale objects removed before uploading"""

    @property
    def file_count(self) -> int:
        """Number of uploaded files."""
        return len(self.uploads)

    @property
    def total_bytes(self) -> int:
        """Total size of the uploaded files."""
        return sum(u.size for u in self.uploads)

    def to_trie(self, factory: Optional[BucketTrieFactory] = None) -> BucketTrie:
        """Fold the uploaded objects into a trie relative to the destination."""
        prefix = self.destination.as_string() or None
        return build_trie(
            ((u.key, u.url) for u in self.uploads), prefix=prefix, factory=factory
        )


class BucketSynchronizer:
    """Replaces a bucket prefix with the contents of a local directory.

    A run goes IDLE -> DELETING_EXISTING -> WALKING -> DONE. There is no
    rollback: files uploaded before a failure stay in place, and files that
    failed are simply missing from the result.
    """

    def __init__(
        self,
        repository: BucketRepository,
        progress_callback: Optional[Callable[[UploadedObject], None]] = None,
    ):
        """Initialize the synchronizer.

        Args:
            repository: Repository of the destination bucket
            progress_callback: Optional callback invoked after every upload
        """
        self.repository = repository
        self.progress_callback = progress_callback
        self.state = SyncState.IDLE

    def _transition(self, state: SyncState) -> None:
        logger.debug("Sync state: %s -> %s", self.state.value, state.value)
        self.state = state

    def synchronize(
        self, src_dir: Path, dest: BucketPath, delete_existing: bool = True
    ) -> SyncResult:
        """Mirror a local directory into a destination prefix.

        Args:
            src_dir: Local directory to upload
            dest: Destination prefix; must not be empty
            delete_existing: Remove everything under the prefix first

        Returns:
            SyncResult listing every uploaded object

        Raises:
            ValueError: If dest is empty
        """
        if src_dir is None:
            raise TypeError("src_dir cannot be None")
        if dest is None:
            raise TypeError("dest cannot be None")
        if not dest:
            raise ValueError("dest cannot be empty")

        self.state = SyncState.IDLE
        result = SyncResult(destination=BucketPath(dest))

        if delete_existing:
            self._transition(SyncState.DELETING_EXISTING)
            result.deleted = self.repository.delete_directory(dest.as_string())

        self._transition(SyncState.WALKING)
        recorder = UploadRecorder(callback=self.progress_callback)
        result.url = self.repository.upload_directory(
            Path(src_dir), BucketPath(dest), recorder
        )
        result.uploads = list(recorder.uploads)

        self._transition(SyncState.DONE)
        logger.debug(
            "Uploaded %d file(s) to %s", result.file_count, dest.as_string()
        )
        return result


def count_local_files(directory: Path) -> int:
    """Count regular files below a directory."""
    return sum(1 for p in Path(directory).rglob("*") if p.is_file())
