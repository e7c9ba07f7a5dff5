"""Exceptions raised by davsync."""

from typing import Optional


class DavSyncError(Exception):
    """Base exception for all davsync errors."""


class DavSyncConfigError(DavSyncError):
    """Raised when the sync configuration is missing or invalid."""


class DavNetworkError(DavSyncError):
    """Raised when the WebDAV server cannot be reached."""


class DavRemoteError(DavSyncError):
    """Raised when the WebDAV server answers with an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        remote_path: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.remote_path = remote_path


class DavAuthenticationError(DavRemoteError):
    """Raised on 401 responses."""


class DavPermissionError(DavRemoteError):
    """Raised on 403 responses."""


class DavDirectoryError(DavRemoteError):
    """Raised when a remote collection cannot be created."""


class DavUploadError(DavRemoteError):
    """Raised when a file upload is rejected."""


class DavDownloadError(DavRemoteError):
    """Raised when a download fails for any reason other than absence."""


class DavFileNotFoundError(DavSyncError):
    """Raised when a local file to upload does not exist."""

    def __init__(self, file_path: str):
        super().__init__(f"Local file not found: {file_path}")
        self.file_path = file_path


class HashStoreError(DavSyncError):
    """Raised when the hash store cannot be read or written."""
