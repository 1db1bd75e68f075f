"""Utility functions and constants for s3mirror."""

# =============================================================================
# Constants for store operations
# =============================================================================

# Arbitrary region used when none is configured; S3 redirects global requests
DEFAULT_REGION: str = "us-east-1"

# Retry configuration for transient errors
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_TIMEOUT: float = 30.0  # seconds

# Maximum number of keys requested per listing page
DEFAULT_PAGE_SIZE: int = 1000

# Static website hosting endpoint, filled with bucket, region and key
HOSTING_URL_FORMAT: str = "http://{bucket}.s3-website-{region}.amazonaws.com/{key}"

# Key delimiter used by the object store
DELIMITER: str = "/"


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Key utilities
# =============================================================================


def normalize_prefix(prefix: str) -> str:
    """Normalize a key prefix by converting backslashes and trimming delimiters.

    Args:
        prefix: Raw prefix string

    Returns:
        Prefix without leading or trailing delimiters

    Examples:
        >>> normalize_prefix("/site/v1/")
        'site/v1'
        >>> normalize_prefix("site\\\\v1")
        'site/v1'
    """
    return prefix.replace("\\", DELIMITER).strip(DELIMITER)


def as_directory_prefix(prefix: str) -> str:
    """Return a prefix that only matches keys below the given directory.

    Examples:
        >>> as_directory_prefix("site/v1")
        'site/v1/'
        >>> as_directory_prefix("site/v1/")
        'site/v1/'
    """
    normalized = normalize_prefix(prefix)
    return f"{normalized}{DELIMITER}" if normalized else ""
