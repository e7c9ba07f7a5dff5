"""Core sync engine mirroring local folders to a WebDAV store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from ..api import WebDavClient
from ..utils import build_remote_path
from .guard import HashStoreGuard
from .hashing import fingerprint
from .modes import HashMode
from .scanner import DirectoryScanner, LocalFile
from .state import HashStore

if TYPE_CHECKING:
    from ..config import SyncConfig

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class SyncEngine:
    """Uploads every changed file of the configured folders.

    Files are processed one at a time. A file is skipped when the hash
    store holds its current fingerprint and the remote copy exists;
    otherwise it is uploaded and its fingerprint recorded. The first error
    aborts the run, and the hash store is persisted however the run ends.
    """

    def __init__(
        self,
        client: WebDavClient,
        config: SyncConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """Initialize sync engine.

        Args:
            client: WebDAV client
            config: Validated sync configuration
            progress_callback: Optional callback function(files_done, total_files)
        """
        self.client = client
        self.config = config
        self.progress_callback = progress_callback
        self.scanner = DirectoryScanner()
        self.hash_mode: HashMode = config.hash_mode
        self.hash_store_file_name = Path(config.hash_store_path).name
        self._processed = 0
        self._total = 0

    def run(self) -> dict:
        """Run a full sync of all configured folders.

        Returns:
            Dictionary with sync statistics

        Raises:
            DavSyncError: If an upload or the hash store handling fails
            OSError: If a local file cannot be read
        """
        stats = {"files": 0, "uploads": 0, "skips": 0, "bytes_uploaded": 0}
        self._processed = 0
        self._total = self.scanner.count_files(self.config.folders)
        logger.debug(
            f"Starting {self.hash_mode.value} hash sync of {self._total} file(s)"
        )

        with HashStoreGuard.from_config(self.client, self.config) as guard:
            for folder in self.config.folders:
                folder_path = Path(folder)
                if not folder_path.exists():
                    logger.warning(f"Folder {folder} does not exist, skipping")
                    continue
                if not folder_path.is_dir():
                    logger.warning(f"Folder {folder} is not a directory, skipping")
                    continue
                self._sync_folder(folder_path, guard.hash_store, stats)
            guard.finalize()

        logger.debug(
            f"Sync finished: {stats['uploads']} uploaded, {stats['skips']} skipped"
        )
        return stats

    def _sync_folder(self, folder: Path, hash_store: HashStore, stats: dict) -> None:
        files = self.scanner.order_deepest_first(self.scanner.scan_local(folder))
        for local_file in files:
            if local_file.name == self.hash_store_file_name:
                logger.debug(f"Skipping hash store file {local_file.path}")
                self._tick()
                continue

            stats["files"] += 1
            if self.sync_file(local_file, hash_store):
                stats["uploads"] += 1
                stats["bytes_uploaded"] += local_file.size
            else:
                stats["skips"] += 1
            self._tick()

    def sync_file(self, local_file: LocalFile, hash_store: HashStore) -> bool:
        """Upload a file if its content or remote copy changed.

        Args:
            local_file: File to synchronize
            hash_store: Store consulted and updated for this file

        Returns:
            True if the file was uploaded, False if it was skipped
        """
        remote_path = build_remote_path(
            local_file.relative_path, self.config.target_dir
        )
        current_hash = fingerprint(local_file.path, self.hash_mode)

        stored_hash = hash_store.get(self.hash_mode, remote_path)
        if stored_hash == current_hash and self.client.file_exists(remote_path):
            logger.debug(f"Unchanged: {remote_path}")
            return False

        self.client.upload_file(local_file.path, remote_path)
        hash_store.set(self.hash_mode, remote_path, current_hash)
        return True

    def _tick(self) -> None:
        self._processed += 1
        if self.progress_callback:
            self.progress_callback(self._processed, self._total)


def sync(
    config: SyncConfig,
    progress_callback: Optional[ProgressCallback] = None,
) -> dict:
    """Mirror the configured folders to the WebDAV endpoint.

    Args:
        config: Validated sync configuration
        progress_callback: Optional callback function(files_done, total_files)

    Returns:
        Dictionary with sync statistics
    """
    with WebDavClient(
        config.webdav_url,
        username=config.username,
        password=config.password,
        timeout=config.timeout_secs,
    ) as client:
        engine = SyncEngine(client, config, progress_callback=progress_callback)
        return engine.run()
