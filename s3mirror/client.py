"""S3 client wrapper exposing the store primitives used by s3mirror."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from .config import config
from .exceptions import (
    BucketDoesNotExistError,
    S3MirrorAPIError,
    S3NetworkError,
    S3NotFoundError,
    S3PermissionError,
    S3UploadError,
)
from .request_factory import PutObjectRequest
from .utils import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound", "NoSuchBucket"}
_FORBIDDEN_CODES = {"403", "AccessDenied", "Forbidden", "AllAccessDisabled"}


@dataclass
class ObjectListing:
    """One page of a prefix listing."""

    bucket: str
    """Bucket that was listed"""

    prefix: str
    """Prefix that was listed"""

    keys: list[str] = field(default_factory=list)
    """Keys on this page"""

    is_truncated: bool = False
    """Whether further pages exist"""

    next_continuation_token: Optional[str] = None
    """Token for requesting the next page"""

    page_size: int = DEFAULT_PAGE_SIZE
    """Maximum number of keys per page"""


class S3Client:
    """Thin wrapper around a boto3 S3 client.

    Credentials are resolved by boto3's default chain (environment, shared
    credentials file, profile, instance metadata). Errors from botocore are
    mapped onto the s3mirror exception hierarchy.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
        s3_client: Any = None,
    ):
        """Initialize the client.

        Args:
            region: Region for the client (uses config if not provided)
            profile: Named AWS profile (uses config if not provided)
            max_retries: Maximum retry attempts (uses config if not provided)
            timeout: Connect/read timeout in seconds (uses config if not provided)
            s3_client: Pre-built boto3 S3 client, mainly for testing
        """
        self.region = region or config.region
        self.profile = profile or config.profile
        self.max_retries = (
            max_retries if max_retries is not None else config.max_retries
        )
        self.timeout = timeout if timeout is not None else config.timeout
        self._client = s3_client

    def _get_client(self) -> Any:
        """Get or create the boto3 client."""
        if self._client is None:
            session = boto3.session.Session(
                profile_name=self.profile, region_name=self.region
            )
            self._client = session.client(
                "s3",
                config=BotoConfig(
                    retries={"max_attempts": self.max_retries, "mode": "standard"},
                    connect_timeout=self.timeout,
                    read_timeout=self.timeout,
                ),
            )
            logger.debug(
                "Created S3 client (region=%s, profile=%s)", self.region, self.profile
            )
        return self._client

    def _handle_client_error(
        self, e: ClientError, message: str, bucket: Optional[str] = None
    ) -> S3MirrorAPIError:
        """Translate a botocore ClientError into an s3mirror exception.

        Args:
            e: The botocore error
            message: Context for the failed operation
            bucket: Bucket involved in the operation, if any

        Returns:
            Exception to raise

        Raises:
            BucketDoesNotExistError: If a named bucket does not exist
        """
        error = e.response.get("Error", {})
        code = str(error.get("Code", ""))
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        detail = error.get("Message") or code or str(e)

        if code == "NoSuchBucket" and bucket is not None:
            raise BucketDoesNotExistError(bucket) from e
        if code in _FORBIDDEN_CODES or status == 403:
            return S3PermissionError(f"{message}: access denied ({detail})", code)
        if code in _NOT_FOUND_CODES or status == 404:
            return S3NotFoundError(f"{message}: not found ({detail})", code)
        return S3MirrorAPIError(f"{message}: {detail}", code)

    @staticmethod
    def _is_not_found(e: ClientError) -> bool:
        code = str(e.response.get("Error", {}).get("Code", ""))
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return code in _NOT_FOUND_CODES or status == 404

    def _call(
        self, operation: str, message: str, bucket: Optional[str], **kwargs: Any
    ) -> Any:
        """Invoke a boto3 operation with error translation."""
        client = self._get_client()
        try:
            return getattr(client, operation)(**kwargs)
        except ClientError as e:
            raise self._handle_client_error(e, message, bucket) from e
        except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
            raise S3NetworkError(f"{message}: network error: {e}") from e
        except BotoCoreError as e:
            raise S3MirrorAPIError(f"{message}: {e}") from e

    # =========================
    # Bucket Operations
    # =========================

    def does_bucket_exist(self, bucket: str) -> bool:
        """Check whether a bucket exists.

        A bucket that exists but denies access counts as existing.
        """
        client = self._get_client()
        try:
            client.head_bucket(Bucket=bucket)
            return True
        except ClientError as e:
            if self._is_not_found(e):
                return False
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if status == 403:
                logger.debug("Bucket %s exists but access is denied", bucket)
                return True
            raise self._handle_client_error(
                e, f"Failed to check bucket {bucket}"
            ) from e
        except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
            raise S3NetworkError(
                f"Failed to check bucket {bucket}: network error: {e}"
            ) from e
        except BotoCoreError as e:
            raise S3MirrorAPIError(f"Failed to check bucket {bucket}: {e}") from e

    def head_bucket(self, bucket: str) -> dict[str, Optional[str]]:
        """Get bucket metadata.

        Returns:
            Dictionary with the bucket's "region"
        """
        response = self._call(
            "head_bucket", f"Failed to read bucket {bucket}", bucket, Bucket=bucket
        )
        region = response.get("BucketRegion") or (
            response.get("ResponseMetadata", {})
            .get("HTTPHeaders", {})
            .get("x-amz-bucket-region")
        )
        return {"region": region or self.region}

    # =========================
    # Object Operations
    # =========================

    def does_object_exist(self, bucket: str, key: str) -> bool:
        """Check whether an object exists at a key."""
        client = self._get_client()
        try:
            client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if self._is_not_found(e):
                return False
            raise self._handle_client_error(
                e, f"Failed to check object {key}", bucket
            ) from e
        except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
            raise S3NetworkError(
                f"Failed to check object {key}: network error: {e}"
            ) from e
        except BotoCoreError as e:
            raise S3MirrorAPIError(f"Failed to check object {key}: {e}") from e

    def put_object(self, request: PutObjectRequest) -> dict[str, Any]:
        """Upload an object.

        Raises:
            S3UploadError: If the store rejects the upload
        """
        try:
            return self._call(
                "put_object",
                f"Failed to upload {request.key}",
                request.bucket,
                **request.to_kwargs(),
            )
        except BucketDoesNotExistError:
            raise
        except S3MirrorAPIError as e:
            raise S3UploadError(str(e), e.code) from e

    def delete_object(self, bucket: str, key: str) -> dict[str, Any]:
        """Delete the object at a key."""
        return self._call(
            "delete_object", f"Failed to delete {key}", bucket, Bucket=bucket, Key=key
        )

    def list_objects(
        self, bucket: str, prefix: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> ObjectListing:
        """List the first page of keys under a prefix."""
        return self._list_page(bucket, prefix, page_size, None)

    def list_next_page(self, listing: ObjectListing) -> ObjectListing:
        """List the page following a truncated listing."""
        if not listing.is_truncated:
            return ObjectListing(
                bucket=listing.bucket,
                prefix=listing.prefix,
                page_size=listing.page_size,
            )
        return self._list_page(
            listing.bucket,
            listing.prefix,
            listing.page_size,
            listing.next_continuation_token,
        )

    def _list_page(
        self,
        bucket: str,
        prefix: str,
        page_size: int,
        continuation_token: Optional[str],
    ) -> ObjectListing:
        kwargs: dict[str, Any] = {
            "Bucket": bucket,
            "Prefix": prefix,
            "MaxKeys": page_size,
        }
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token

        response = self._call(
            "list_objects_v2", f"Failed to list {prefix}", bucket, **kwargs
        )
        keys = [item["Key"] for item in response.get("Contents", [])]
        listing = ObjectListing(
            bucket=bucket,
            prefix=prefix,
            keys=keys,
            is_truncated=bool(response.get("IsTruncated", False)),
            next_continuation_token=response.get("NextContinuationToken"),
            page_size=page_size,
        )
        logger.debug(
            "Listed %d key(s) under [%s] (truncated=%s)",
            len(keys),
            prefix,
            listing.is_truncated,
        )
        return listing

    def get_url(self, bucket: str, key: str, region: Optional[str] = None) -> str:
        """Get the canonical URL of a key.

        The key need not exist; for a directory key this is the URL of the
        common prefix.

        Args:
            bucket: Bucket name
            key: Object key
            region: Region of the bucket (defaults to the client region)
        """
        quoted = quote(key, safe="/~")
        return f"https://{bucket}.s3.{region or self.region}.amazonaws.com/{quoted}"
