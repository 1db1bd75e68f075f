"""Data models shared by the repository and the synchronizer."""

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(frozen=True)
class UploadedObject:
    """An object successfully written to the bucket."""

    key: str
    """Key the object was stored under"""

    url: str
    """Canonical URL of the object"""

    size: int = 0
    """Size of the uploaded file in bytes"""


@dataclass
class UploadRecorder:
    """Collects uploaded objects in the order they were written.

    An optional callback is invoked after each recorded upload, e.g. to
    drive a progress display.
    """

    uploads: list[UploadedObject] = field(default_factory=list)
    """Objects recorded so far"""

    callback: Optional[Callable[[UploadedObject], None]] = None
    """Called with each newly recorded object"""

    def record(self, uploaded: UploadedObject) -> None:
        """Record one uploaded object."""
        self.uploads.append(uploaded)
        if self.callback is not None:
            self.callback(uploaded)

    @property
    def total_bytes(self) -> int:
        """Total size of all recorded uploads."""
        return sum(u.size for u in self.uploads)

    def __len__(self) -> int:
        return len(self.uploads)
