"""s3mirror - mirror local directory trees into S3 buckets."""

from .client import S3Client
from .deploy import Deployer, DeployOptions
from .exceptions import (
    BucketDoesNotExistError,
    DeployError,
    ObjectRequestCreationError,
    S3MirrorAPIError,
    S3MirrorConfigError,
    S3MirrorError,
    S3NetworkError,
    S3NotFoundError,
    S3PermissionError,
    S3UploadError,
)
from .path import BucketPath
from .repository import BucketRepository, create_repository
from .sync import BucketSynchronizer, SyncResult, SyncState
from .trie import BucketTrie, BucketTrieFactory, build_trie

__all__ = [
    "S3Client",
    "BucketPath",
    "BucketRepository",
    "create_repository",
    "BucketSynchronizer",
    "SyncResult",
    "SyncState",
    "BucketTrie",
    "BucketTrieFactory",
    "build_trie",
    "Deployer",
    "DeployOptions",
    "S3MirrorError",
    "S3MirrorAPIError",
    "S3MirrorConfigError",
    "S3NetworkError",
    "S3NotFoundError",
    "S3PermissionError",
    "S3UploadError",
    "BucketDoesNotExistError",
    "ObjectRequestCreationError",
    "DeployError",
]
