"""Configuration management for s3mirror.

Values are resolved from environment variables first, then from the
config file at ``~/.config/s3mirror/config`` (simple ``KEY=VALUE`` lines).
AWS credentials are never stored here; boto3 resolves them through its
default credential chain.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .exceptions import S3MirrorConfigError
from .utils import DEFAULT_MAX_RETRIES, DEFAULT_REGION, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

BUCKET_KEY = "S3MIRROR_BUCKET"
REGION_KEY = "S3MIRROR_REGION"
PROFILE_KEY = "AWS_PROFILE"
MAX_RETRIES_KEY = "S3MIRROR_MAX_RETRIES"
TIMEOUT_KEY = "S3MIRROR_TIMEOUT"


class Config:
    """Resolves s3mirror settings from the environment and the config file."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_dir: Directory holding the config file. Defaults to
                ~/.config/s3mirror/
        """
        if config_dir is None:
            config_dir = Path.home() / ".config" / "s3mirror"
        self.config_dir = config_dir

    def get_config_path(self) -> Path:
        """Get the path of the config file."""
        return self.config_dir / "config"

    def _read_file(self) -> dict[str, str]:
        """Read KEY=VALUE pairs from the config file.

        Returns:
            Dictionary of stored values (empty if the file does not exist)
        """
        path = self.get_config_path()
        if not path.exists():
            return {}

        values: dict[str, str] = {}
        try:
            with open(path, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue
                    key, value = line.split("=", 1)
                    values[key.strip()] = value.strip()
        except OSError as e:
            logger.warning(f"Failed to read config file {path}: {e}")
        return values

    def _write_value(self, key: str, value: Optional[str]) -> None:
        """Store a single value in the config file, removing it if None."""
        values = self._read_file()
        if value is None:
            values.pop(key, None)
        else:
            values[key] = value

        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_config_path()
        with open(path, "w", encoding="utf-8") as f:
            for k, v in sorted(values.items()):
                f.write(f"{k}={v}\n")
        logger.debug(f"Saved {key} to {path}")

    def _get(self, key: str) -> Optional[str]:
        value = os.environ.get(key)
        if value:
            return value
        return self._read_file().get(key) or None

    @property
    def bucket(self) -> Optional[str]:
        """Default destination bucket."""
        return self._get(BUCKET_KEY)

    @property
    def region(self) -> str:
        """Region used to create the S3 client."""
        return (
            self._get(REGION_KEY)
            or os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or DEFAULT_REGION
        )

    @property
    def profile(self) -> Optional[str]:
        """Named AWS profile, if any."""
        return self._get(PROFILE_KEY)

    @property
    def max_retries(self) -> int:
        """Maximum retry attempts for store requests."""
        value = self._get(MAX_RETRIES_KEY)
        try:
            return int(value) if value else DEFAULT_MAX_RETRIES
        except ValueError:
            logger.warning(f"Invalid {MAX_RETRIES_KEY} value: {value}")
            return DEFAULT_MAX_RETRIES

    @property
    def timeout(self) -> float:
        """Connect/read timeout in seconds for store requests."""
        value = self._get(TIMEOUT_KEY)
        try:
            return float(value) if value else DEFAULT_TIMEOUT
        except ValueError:
            logger.warning(f"Invalid {TIMEOUT_KEY} value: {value}")
            return DEFAULT_TIMEOUT

    def is_configured(self) -> bool:
        """Check whether a default bucket is available."""
        return self.bucket is not None

    def require_bucket(self, override: Optional[str] = None) -> str:
        """Get the bucket to operate on.

        Args:
            override: Bucket given explicitly, takes precedence

        Returns:
            Bucket name

        Raises:
            S3MirrorConfigError: If no bucket is configured
        """
        bucket = override or self.bucket
        if not bucket:
            raise S3MirrorConfigError(
                "No bucket specified. Use --bucket, set S3MIRROR_BUCKET "
                "or run 's3mirror init'."
            )
        return bucket

    def save_default_bucket(self, bucket: Optional[str]) -> None:
        """Store the default bucket (None removes it)."""
        self._write_value(BUCKET_KEY, bucket)

    def save_region(self, region: Optional[str]) -> None:
        """Store the default region (None removes it)."""
        self._write_value(REGION_KEY, region)


config = Config()
