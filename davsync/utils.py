"""Utility functions and constants for davsync."""

from typing import Optional
from urllib.parse import quote

# =============================================================================
# Constants
# =============================================================================

# Read size used when streaming a file through the hash accumulator
HASH_CHUNK_SIZE: int = 8192

# Number of leading content bytes included in a pseudo hash
PSEUDO_HASH_PREFIX_SIZE: int = 1024

# Default per-request timeout (seconds)
DEFAULT_TIMEOUT_SECS: int = 3

# Default file names for the local and remote hash store
DEFAULT_HASH_STORE_PATH: str = "hashes.yaml"
DEFAULT_REMOTE_HASH_PATH: str = "hashes.yaml"


# =============================================================================
# Remote path utilities
# =============================================================================


def build_remote_path(relative_path: str, target_dir: Optional[str] = None) -> str:
    """Compute the remote path a local file is uploaded to.

    Args:
        relative_path: Path relative to the synced folder, using forward slashes
        target_dir: Optional remote directory prefix

    Returns:
        ``target_dir/relative_path`` with any trailing slash of the prefix
        removed, or ``relative_path`` unchanged when no prefix is set

    Examples:
        >>> build_remote_path("a.txt")
        'a.txt'
        >>> build_remote_path("sub/a.txt", "backup/")
        'backup/sub/a.txt'
    """
    if not target_dir:
        return relative_path
    return f"{target_dir.rstrip('/')}/{relative_path}"


def join_url(base_url: str, remote_path: str) -> str:
    """Join a remote path to the server base URL.

    The trailing slash of the base URL is trimmed and exactly one ``/``
    separates it from the percent-encoded remote path.

    Examples:
        >>> join_url("http://host/dav/", "a b/c.txt")
        'http://host/dav/a%20b/c.txt'
    """
    encoded = quote(remote_path.lstrip("/"), safe="/")
    return f"{base_url.rstrip('/')}/{encoded}"


def parent_directory(remote_path: str) -> str:
    """Return the parent collection of a remote path ('' for top level)."""
    remote_path = remote_path.strip("/")
    if "/" not in remote_path:
        return ""
    return remote_path.rsplit("/", 1)[0]


def directory_segments(remote_dir: str) -> list[str]:
    """List every prefix of a remote directory, root first.

    Examples:
        >>> directory_segments("sub/dir")
        ['sub', 'sub/dir']
    """
    parts = [part for part in remote_dir.split("/") if part]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


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
