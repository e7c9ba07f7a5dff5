"""davsync - mirror local folders to a WebDAV server."""

from .api import WebDavClient
from .config import SyncConfig
from .exceptions import (
    DavAuthenticationError,
    DavDirectoryError,
    DavDownloadError,
    DavFileNotFoundError,
    DavNetworkError,
    DavPermissionError,
    DavRemoteError,
    DavSyncConfigError,
    DavSyncError,
    DavUploadError,
    HashStoreError,
)
from .sync import HashMode, HashStore, HashStoreGuard, SyncEngine, sync

__version__ = "0.1.0"

__all__ = [
    "WebDavClient",
    "SyncConfig",
    "SyncEngine",
    "HashStore",
    "HashStoreGuard",
    "HashMode",
    "sync",
    "DavSyncError",
    "DavSyncConfigError",
    "DavNetworkError",
    "DavRemoteError",
    "DavAuthenticationError",
    "DavPermissionError",
    "DavDirectoryError",
    "DavUploadError",
    "DavDownloadError",
    "DavFileNotFoundError",
    "HashStoreError",
]
