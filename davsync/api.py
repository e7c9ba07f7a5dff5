"""WebDAV client used to mirror files to a remote store."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import httpx

from .exceptions import (
    DavAuthenticationError,
    DavDirectoryError,
    DavDownloadError,
    DavFileNotFoundError,
    DavNetworkError,
    DavPermissionError,
    DavRemoteError,
    DavSyncConfigError,
    DavUploadError,
)
from .utils import DEFAULT_TIMEOUT_SECS, directory_segments, join_url, parent_directory

logger = logging.getLogger(__name__)

# MKCOL answers that still leave the collection in place: 405 when it already
# exists, 409 when a parent is being created by someone else.
MKCOL_ACCEPTED_STATUSES = frozenset({405, 409})


class WebDavClient:
    """Client for a WebDAV endpoint.

    Every request carries basic authentication (when both credentials are
    configured) and a per-request timeout. Requests are never retried.
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the WebDAV client.

        Args:
            base_url: Base URL of the WebDAV endpoint
            username: Optional user name for basic authentication
            password: Optional password for basic authentication
            timeout: Request timeout in seconds (default: 3)
            transport: Optional httpx transport (used to plug in test servers)
        """
        if not base_url or not base_url.strip():
            raise DavSyncConfigError("WebDAV URL not configured")

        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout
        self.transport = transport

        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            auth = None
            if self.username is not None and self.password is not None:
                auth = httpx.BasicAuth(self.username, self.password)
            self._client = httpx.Client(
                auth=auth,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def copy(self) -> "WebDavClient":
        """Return an independent client with the same settings."""
        return WebDavClient(
            self.base_url,
            username=self.username,
            password=self.password,
            timeout=self.timeout,
            transport=self.transport,
        )

    def __enter__(self) -> "WebDavClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def url_for(self, remote_path: str) -> str:
        """Absolute URL of a remote path."""
        return join_url(self.base_url, remote_path)

    def _send(self, method: str, remote_path: str, **kwargs: Any) -> httpx.Response:
        """Send a single request and return the response, whatever its status.

        Raises:
            DavNetworkError: If the request could not be completed
        """
        url = kwargs.pop("url", None) or self.url_for(remote_path)
        try:
            response = self._get_client().request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise DavNetworkError(f"Network error during {method} {url}: {e}") from e
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def _raise_for_status(
        self,
        response: httpx.Response,
        remote_path: str,
        error_class: type[DavRemoteError],
        action: str,
    ) -> None:
        """Translate a non-success response into a davsync exception."""
        if response.is_success:
            return
        status_code = response.status_code
        if status_code == 401:
            raise DavAuthenticationError(
                f"{action} failed for {remote_path}: unauthorized access",
                status_code=status_code,
                remote_path=remote_path,
            )
        if status_code == 403:
            raise DavPermissionError(
                f"{action} failed for {remote_path}: access forbidden",
                status_code=status_code,
                remote_path=remote_path,
            )
        raise error_class(
            f"{action} failed for {remote_path} with status {status_code}",
            status_code=status_code,
            remote_path=remote_path,
        )

    # =========================
    # Queries
    # =========================

    def file_exists(self, remote_path: str) -> bool:
        """Check whether a remote resource exists.

        Args:
            remote_path: Path relative to the base URL

        Returns:
            True only if the server answers HEAD with a 2xx status

        Raises:
            DavNetworkError: If the server cannot be reached
        """
        response = self._send("HEAD", remote_path)
        return response.is_success

    # =========================
    # Collections
    # =========================

    def ensure_directory(self, remote_dir: str) -> None:
        """Create a remote collection and all of its parents.

        MKCOL only creates the last segment of a path, so each segment is
        created in turn from the root down. Segments that already exist are
        accepted.

        Args:
            remote_dir: Collection path relative to the base URL

        Raises:
            DavDirectoryError: If a segment cannot be created
            DavNetworkError: If the server cannot be reached
        """
        for segment in directory_segments(remote_dir):
            url = self.url_for(segment) + "/"
            response = self._send("MKCOL", segment, url=url)
            if response.is_success or response.status_code in MKCOL_ACCEPTED_STATUSES:
                continue
            self._raise_for_status(
                response, segment, DavDirectoryError, "Creating directory"
            )

    # =========================
    # Transfers
    # =========================

    def delete(self, remote_path: str) -> bool:
        """Delete a remote resource.

        Returns:
            True if the server confirmed the deletion
        """
        response = self._send("DELETE", remote_path)
        return response.is_success

    def upload_file(self, local_path: Path | str, remote_path: str) -> None:
        """Upload a local file, replacing any existing remote copy.

        The parent collections are created first, and any existing remote
        object is deleted before the PUT since servers handle overwrites
        inconsistently. Failure of that delete is ignored.

        Args:
            local_path: File to upload
            remote_path: Destination path relative to the base URL

        Raises:
            DavFileNotFoundError: If the local file does not exist
            DavUploadError: If the server rejects the upload
            DavDirectoryError: If a parent collection cannot be created
            DavNetworkError: If the server cannot be reached
        """
        local_path = Path(local_path)
        if not local_path.is_file():
            raise DavFileNotFoundError(str(local_path))

        parent = parent_directory(remote_path)
        if parent:
            self.ensure_directory(parent)

        try:
            self.delete(remote_path)
        except DavNetworkError as e:
            logger.debug(f"Ignoring failed delete of {remote_path}: {e}")

        content = local_path.read_bytes()
        response = self._send("PUT", remote_path, content=content)
        self._raise_for_status(response, remote_path, DavUploadError, "Upload")
        logger.info(f"Uploaded {local_path} to {remote_path}")

    def download_file(self, remote_path: str, local_path: Path | str) -> Path | None:
        """Download a remote file.

        Args:
            remote_path: Source path relative to the base URL
            local_path: Where to write the content

        Returns:
            The local path, or None if the remote file does not exist (in
            which case nothing is written)

        Raises:
            DavDownloadError: If the server answers with any other error or
                the local file cannot be written
            DavNetworkError: If the server cannot be reached

        Content is streamed into a sibling ``.part`` file that replaces
        ``local_path`` only once the whole body has arrived, so a failed
        download never leaves a truncated file behind.
        """
        local_path = Path(local_path)
        part_path = local_path.with_name(local_path.name + ".part")
        url = self.url_for(remote_path)
        client = self._get_client()

        try:
            with client.stream("GET", url) as response:
                if response.status_code == 404:
                    logger.debug(f"Remote file {remote_path} not found")
                    return None
                self._raise_for_status(
                    response, remote_path, DavDownloadError, "Download"
                )
                with open(part_path, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=8192):
                        if chunk:
                            f.write(chunk)
            os.replace(part_path, local_path)
        except httpx.RequestError as e:
            part_path.unlink(missing_ok=True)
            raise DavNetworkError(f"Network error during download: {e}") from e
        except OSError as e:
            part_path.unlink(missing_ok=True)
            raise DavDownloadError(
                f"Failed to write file: {e}", remote_path=remote_path
            ) from e

        logger.debug(f"Downloaded {remote_path} to {local_path}")
        return local_path
