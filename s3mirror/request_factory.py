"""Construction of upload requests for local files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Optional

from .exceptions import ObjectRequestCreationError

PUBLIC_READ_ACL = "public-read"


@dataclass
class PutObjectRequest:
    """A single object upload: an open file stream plus its metadata.

    Use as a context manager so the stream is closed after the put.
    """

    bucket: str
    """Destination bucket"""

    key: str
    """Destination key"""

    body: BinaryIO
    """Open binary stream of the file contents"""

    content_length: int
    """Size of the body in bytes"""

    acl: str = PUBLIC_READ_ACL
    """Canned access control list applied to the object"""

    content_type: Optional[str] = None
    """MIME type of the object, if known"""

    def to_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for boto3's ``put_object``."""
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": self.key,
            "Body": self.body,
            "ContentLength": self.content_length,
            "ACL": self.acl,
        }
        if self.content_type:
            kwargs["ContentType"] = self.content_type
        return kwargs

    def close(self) -> None:
        """Close the body stream."""
        self.body.close()

    def __enter__(self) -> "PutObjectRequest":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class PutObjectRequestFactory:
    """Creates public-read upload requests for one bucket."""

    def __init__(self, bucket_name: str):
        """Initialize the factory.

        Args:
            bucket_name: Bucket for which requests are created
        """
        if bucket_name is None:
            raise TypeError("bucket_name cannot be None")
        if not bucket_name.strip():
            raise ValueError("bucket_name cannot be empty")
        self.bucket_name = bucket_name

    def create(self, file: Path, dest: str) -> PutObjectRequest:
        """Create an upload request for a local file.

        Args:
            file: Local file to upload
            dest: Destination key in the bucket

        Returns:
            PutObjectRequest holding an open stream of the file

        Raises:
            ObjectRequestCreationError: If the file cannot be opened
        """
        if file is None:
            raise TypeError("file cannot be None")
        if dest is None:
            raise TypeError("dest cannot be None")
        if not dest.strip():
            raise ValueError("dest cannot be empty")

        try:
            body = open(file, "rb")
        except OSError as e:
            raise ObjectRequestCreationError(
                f"Cannot open {file} for upload: {e}"
            ) from e

        try:
            content_length = Path(file).stat().st_size
        except OSError as e:
            body.close()
            raise ObjectRequestCreationError(
                f"Cannot read size of {file}: {e}"
            ) from e

        return PutObjectRequest(
            bucket=self.bucket_name,
            key=dest,
            body=body,
            content_length=content_length,
            content_type=_detect_content_type(Path(file)),
        )


def _detect_content_type(file: Path) -> Optional[str]:
    """Guess the MIME type from the file name."""
    import mimetypes

    content_type, _ = mimetypes.guess_type(file.name)
    return content_type
