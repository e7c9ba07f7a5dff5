"""Lifecycle guard for the hash store of a sync run.

On creation the guard seeds the hash store from the copy published on the
server. ``finalize()`` saves the store locally and uploads it, raising on
failure. If a run ends without ``finalize()`` (for example because an
upload failed), leaving the ``with`` block still saves the store locally
and starts a background upload whose outcome is only logged, so progress
recorded before the failure is never lost.
"""

from __future__ import annotations

import logging
import tempfile
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..exceptions import DavSyncError
from .state import HashStore

if TYPE_CHECKING:
    from ..api import WebDavClient
    from ..config import SyncConfig

logger = logging.getLogger(__name__)

REMOTE_DOWNLOAD_NAME = "remote_hashes.yaml"


class HashStoreGuard:
    """Owns the hash store for one sync run.

    Examples:
        >>> with HashStoreGuard(client, config) as guard:
        ...     guard.hash_store.set(HashMode.FULL, "a.txt", digest)
        ...     guard.finalize()
    """

    def __init__(
        self,
        client: WebDavClient,
        local_path: Path | str,
        remote_path: str,
    ):
        """Download the remote hash store and load it.

        A missing or unreachable remote store is not an error: the run
        starts with an empty store.

        Args:
            client: WebDAV client used for download and upload
            local_path: Local file the store is saved to
            remote_path: Remote path the store is published to

        Raises:
            HashStoreError: If the downloaded store cannot be parsed
        """
        self.client = client
        self.local_path = Path(local_path)
        self.remote_path = remote_path
        self.finalized = False
        self.background_upload: Optional[threading.Thread] = None

        with tempfile.TemporaryDirectory(prefix="davsync-") as tmp_dir:
            temp_remote_path = Path(tmp_dir) / REMOTE_DOWNLOAD_NAME
            try:
                downloaded = client.download_file(remote_path, temp_remote_path)
            except DavSyncError as e:
                logger.warning(f"Could not download remote hash store: {e}")
                downloaded = None
            if downloaded is None:
                self.hash_store = HashStore()
            else:
                self.hash_store = HashStore.load(downloaded)

        logger.debug(
            f"Hash store seeded with {len(self.hash_store)} entries "
            f"from {remote_path}"
        )

    @classmethod
    def from_config(cls, client: WebDavClient, config: SyncConfig) -> HashStoreGuard:
        """Create a guard using the hash store paths of a configuration."""
        return cls(client, config.hash_store_path, config.remote_hash_path)

    def finalize(self) -> None:
        """Save the store locally, then upload it to the remote path.

        Raises:
            HashStoreError: If the local save fails
            DavSyncError: If the upload fails
        """
        self.finalized = True
        self.hash_store.save(self.local_path)
        self.client.upload_file(self.local_path, self.remote_path)
        logger.debug(f"Published hash store to {self.remote_path}")

    def release(self) -> None:
        """Best-effort persistence for runs that did not call ``finalize()``.

        The local save happens immediately. The upload runs on a daemon
        thread with its own client and is not waited for; failures of
        either step are logged and swallowed.
        """
        if self.finalized:
            return
        self.finalized = True

        try:
            self.hash_store.save(self.local_path)
        except DavSyncError as e:
            logger.error(f"Failed to save hash store locally: {e}")
            return

        client = self.client.copy()
        self.background_upload = threading.Thread(
            target=_upload_in_background,
            args=(client, self.local_path, self.remote_path),
            name="davsync-hash-store-upload",
            daemon=True,
        )
        self.background_upload.start()

    def __enter__(self) -> HashStoreGuard:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()


def _upload_in_background(client: WebDavClient, local_path: Path, remote_path: str):
    try:
        with client:
            client.upload_file(local_path, remote_path)
    except Exception as e:
        logger.error(f"Failed to upload hash store to remote: {e}")
