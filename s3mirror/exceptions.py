"""Exceptions raised by s3mirror."""

from typing import Optional


class S3MirrorError(Exception):
    """Base exception for all s3mirror errors."""


class S3MirrorConfigError(S3MirrorError):
    """Raised when required configuration is missing or invalid."""


class S3MirrorAPIError(S3MirrorError):
    """Raised when a request to the object store fails."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class S3PermissionError(S3MirrorAPIError):
    """Raised when the store denies access to a bucket or object."""


class S3NotFoundError(S3MirrorAPIError):
    """Raised when a bucket or object does not exist."""


class S3UploadError(S3MirrorAPIError):
    """Raised when an object could not be written to the store."""


class S3NetworkError(S3MirrorAPIError):
    """Raised when the store endpoint cannot be reached."""


class BucketDoesNotExistError(S3MirrorError):
    """Raised when the destination bucket does not exist."""

    def __init__(self, bucket: str):
        super().__init__(f"Bucket does not exist: {bucket}")
        self.bucket = bucket


class ObjectRequestCreationError(S3MirrorError):
    """Raised when an upload request cannot be built for a local file."""


class DeployError(S3MirrorError):
    """Raised when a deployment cannot be completed."""
