"""Bucket repository: uploads local files and directories to one bucket."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from .client import S3Client
from .exceptions import (
    BucketDoesNotExistError,
    ObjectRequestCreationError,
    S3MirrorAPIError,
)
from .models import UploadedObject, UploadRecorder
from .path import BucketPath
from .request_factory import PutObjectRequestFactory
from .utils import HOSTING_URL_FORMAT, as_directory_prefix

logger = logging.getLogger(__name__)


class BucketRepository:
    """Wraps a single S3 bucket.

    Uploads replace whatever object already exists at the destination key.
    Failures affecting a single file or directory are logged and reported
    by returning None so that a directory walk continues with the siblings.
    """

    def __init__(
        self,
        client: S3Client,
        bucket_name: str,
        request_factory: Optional[PutObjectRequestFactory] = None,
    ):
        """Initialize the repository.

        Args:
            client: S3 client
            bucket_name: Name of the bucket this repository represents
            request_factory: Factory for upload requests (created if omitted)

        Raises:
            BucketDoesNotExistError: If the bucket does not exist
        """
        if client is None:
            raise TypeError("client cannot be None")
        if bucket_name is None:
            raise TypeError("bucket_name cannot be None")
        if not bucket_name.strip():
            raise ValueError("bucket_name cannot be empty")

        self.client = client
        self.bucket_name = bucket_name
        self.request_factory = request_factory or PutObjectRequestFactory(bucket_name)
        self._region: Optional[str] = None

        if not client.does_bucket_exist(bucket_name):
            raise BucketDoesNotExistError(bucket_name)

    @property
    def region(self) -> str:
        """Region the bucket lives in, looked up once."""
        if self._region is None:
            self._region = self.client.head_bucket(self.bucket_name)["region"]
        return self._region

    def get_object_url(self, key: str) -> str:
        """Get the URL of a key in the bucket's own region."""
        try:
            region = self.region
        except S3MirrorAPIError as e:
            logger.warning("Cannot resolve region of %s: %s", self.bucket_name, e)
            return self.client.get_url(self.bucket_name, key)
        return self.client.get_url(self.bucket_name, key, region=region)

    def _delete_if_exists(self, key: str) -> None:
        """Delete a stale object at a key before it is replaced."""
        if not key:
            return
        if self.client.does_object_exist(self.bucket_name, key):
            logger.debug("Deleting existing object: %s", key)
            self.client.delete_object(self.bucket_name, key)

    def upload_file(
        self,
        src: Path,
        dest: BucketPath,
        recorder: Optional[UploadRecorder] = None,
    ) -> Optional[str]:
        """Upload a single file.

        Args:
            src: Local file
            dest: Destination path in the bucket
            recorder: Optional recorder receiving the uploaded object

        Returns:
            URL of the uploaded object, or None if nothing was uploaded
        """
        if src is None:
            raise TypeError("src cannot be None")
        if dest is None:
            raise TypeError("dest cannot be None")

        src = Path(src)
        if not src.exists() or not src.is_file():
            logger.warning("File is not accessible, skipping: %s", src.name)
            return None

        key = dest.as_string()
        try:
            request = self.request_factory.create(src, key)
        except ObjectRequestCreationError as e:
            logger.error("Failed to create upload request for %s: %s", key, e)
            return None

        with request:
            # The stale object is only removed once its replacement is open
            try:
                self._delete_if_exists(key)
            except S3MirrorAPIError as e:
                logger.error("Failed to replace existing object %s: %s", key, e)
                return None

            logger.debug("Uploading file: %s", key)
            try:
                self.client.put_object(request)
            except S3MirrorAPIError as e:
                logger.error("Failed to upload %s: %s", key, e)
                return None

        url = self.get_object_url(key)
        if recorder is not None:
            recorder.record(
                UploadedObject(key=key, url=url, size=request.content_length)
            )
        return url

    def upload_directory(
        self,
        src_dir: Path,
        dest: BucketPath,
        recorder: Optional[UploadRecorder] = None,
    ) -> Optional[str]:
        """Recursively upload the contents of a directory.

        Empty directories are never created remotely since the store has no
        directory objects.

        Args:
            src_dir: Local directory
            dest: Destination path in the bucket
            recorder: Optional recorder receiving every uploaded object

        Returns:
            URL of the destination prefix, or None if nothing was walked
        """
        if src_dir is None:
            raise TypeError("src_dir cannot be None")
        if dest is None:
            raise TypeError("dest cannot be None")

        src_dir = Path(src_dir)
        if not src_dir.exists() or not src_dir.is_dir():
            logger.warning("Directory is not accessible, skipping: %s", src_dir.name)
            return None

        key = dest.as_string()
        try:
            self._delete_if_exists(key)
        except S3MirrorAPIError as e:
            logger.error("Failed to replace existing object %s: %s", key, e)
            return None

        try:
            entries = sorted(src_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", src_dir.name, e)
            return None

        if not entries:
            logger.debug("Skipping empty directory: %s", src_dir.name)
            return None

        for entry in entries:
            try:
                child_dest = BucketPath(dest).append(entry.name)
            except ValueError as e:
                logger.warning("Skipping entry with invalid name %r: %s", entry.name, e)
                continue
            if entry.is_file():
                self.upload_file(entry, child_dest, recorder)
            elif entry.is_dir():
                self.upload_directory(entry, child_dest, recorder)
            else:
                logger.debug("Skipping special file: %s", entry)

        return self.get_object_url(key)

    def list_keys(self, prefix: str) -> Iterator[str]:
        """Yield every key below a prefix, following all listing pages."""
        if prefix is None:
            raise TypeError("prefix cannot be None")

        listing = self.client.list_objects(self.bucket_name, prefix)
        while True:
            yield from listing.keys
            # A single listing call may be truncated
            if not listing.is_truncated:
                break
            listing = self.client.list_next_page(listing)

    def delete_directory(self, prefix: str) -> int:
        """Delete every object below a directory prefix.

        The prefix is treated as a directory: "site/v1" removes "site/v1/..."
        but leaves "site/v10/...".

        Args:
            prefix: Directory prefix

        Returns:
            Number of deleted objects
        """
        if prefix is None:
            raise TypeError("prefix cannot be None")
        directory_prefix = as_directory_prefix(prefix)
        if not directory_prefix:
            raise ValueError("prefix cannot be empty")

        deleted = 0
        for key in self.list_keys(directory_prefix):
            logger.debug("Deleting existing object: %s", key)
            self.client.delete_object(self.bucket_name, key)
            deleted += 1

        logger.debug("Deleted %d object(s) under %s", deleted, directory_prefix)
        return deleted

    def get_hosting_url(self, key: Optional[str] = None) -> str:
        """Get the static website hosting URL for a key.

        Args:
            key: Key below the bucket root (None for the root)

        Returns:
            Website URL built from the bucket name and region
        """
        return HOSTING_URL_FORMAT.format(
            bucket=self.bucket_name, region=self.region, key=key or ""
        )


def create_repository(
    bucket_name: str, client: Optional[S3Client] = None
) -> BucketRepository:
    """Create a repository for a bucket with a default client.

    Raises:
        BucketDoesNotExistError: If the bucket does not exist
    """
    return BucketRepository(client or S3Client(), bucket_name)
