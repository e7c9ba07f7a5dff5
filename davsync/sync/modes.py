"""Fingerprint modes for change detection."""

from enum import Enum


class HashMode(str, Enum):
    """How a file's content fingerprint is computed.

    Each mode records its fingerprints in its own namespace of the hash
    store, so values of different modes are never compared.
    """

    FULL = "full"
    """SHA-256 over the whole file content"""

    PSEUDO = "pseudo"
    """SHA-256 over name, size and the first 1 KB of content.

    Changes beyond the first 1024 bytes that keep name and size intact go
    undetected in this mode.
    """

    @property
    def namespace(self) -> str:
        """Key of the hash store section used by this mode."""
        if self == HashMode.PSEUDO:
            return "pseudo_hashes"
        return "regular_hashes"

    @classmethod
    def from_flag(cls, use_pseudo_hash: bool) -> "HashMode":
        """Select the mode from the ``use_pseudo_hash`` switch."""
        return cls.PSEUDO if use_pseudo_hash else cls.FULL
