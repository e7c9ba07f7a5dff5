"""Sync engine for davsync - hash-based one-way mirroring to WebDAV."""

from .engine import SyncEngine, sync
from .guard import HashStoreGuard
from .hashing import compute_hash, compute_pseudo_hash, fingerprint
from .modes import HashMode
from .scanner import DirectoryScanner, LocalFile
from .state import HashStore

__all__ = [
    "SyncEngine",
    "sync",
    "HashStoreGuard",
    "HashStore",
    "HashMode",
    "DirectoryScanner",
    "LocalFile",
    "compute_hash",
    "compute_pseudo_hash",
    "fingerprint",
]
