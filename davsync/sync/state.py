"""Hash store tracking the fingerprint of every uploaded file.

The store maps remote paths to content fingerprints so that unchanged
files are not uploaded again. Full and pseudo fingerprints live in
separate sections and are never mixed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from ..exceptions import HashStoreError
from .modes import HashMode

logger = logging.getLogger(__name__)


@dataclass
class HashStore:
    """In-memory mapping from remote path to fingerprint, per hash mode."""

    regular_hashes: dict[str, str] = field(default_factory=dict)
    """Full SHA-256 fingerprints keyed by remote path"""

    pseudo_hashes: dict[str, str] = field(default_factory=dict)
    """Pseudo fingerprints keyed by remote path"""

    def hashes_for(self, mode: HashMode) -> dict[str, str]:
        """Return the section holding fingerprints of ``mode``."""
        return getattr(self, mode.namespace)

    def get(self, mode: HashMode, remote_path: str) -> Optional[str]:
        """Look up the stored fingerprint for a remote path."""
        return self.hashes_for(mode).get(remote_path)

    def set(self, mode: HashMode, remote_path: str, value: str) -> None:
        """Record the fingerprint of an uploaded file (last write wins)."""
        self.hashes_for(mode)[remote_path] = value

    def __len__(self) -> int:
        return len(self.regular_hashes) + len(self.pseudo_hashes)

    def to_dict(self) -> dict:
        """Convert the store to a dictionary for YAML serialization."""
        return {
            HashMode.FULL.namespace: dict(sorted(self.regular_hashes.items())),
            HashMode.PSEUDO.namespace: dict(sorted(self.pseudo_hashes.items())),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "HashStore":
        """Create a HashStore from a dictionary.

        Missing sections and unknown keys are ignored; an empty document
        yields an empty store.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise HashStoreError(
                f"Hash store must be a mapping, got {type(data).__name__}"
            )
        return cls(
            regular_hashes=_read_section(data, HashMode.FULL.namespace),
            pseudo_hashes=_read_section(data, HashMode.PSEUDO.namespace),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "HashStore":
        """Load a hash store from a YAML file.

        A missing file is not an error: it yields an empty store.

        Raises:
            HashStoreError: If the file cannot be read or parsed
        """
        path = Path(path)
        if not path.exists():
            logger.debug(f"No hash store found at {path}")
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise HashStoreError(f"Invalid hash store {path}: {e}") from e
        except OSError as e:
            raise HashStoreError(f"Failed to read hash store {path}: {e}") from e

        store = cls.from_dict(data)
        logger.debug(
            f"Loaded hash store with {len(store.regular_hashes)} full and "
            f"{len(store.pseudo_hashes)} pseudo hashes from {path}"
        )
        return store

    def save(self, path: Union[str, Path]) -> None:
        """Write the hash store to a YAML file.

        Keys are written sorted so that an unchanged store produces an
        identical file.

        Raises:
            HashStoreError: If the file cannot be written
        """
        path = Path(path)
        try:
            if path.parent != Path(""):
                path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self.to_dict(),
                    f,
                    default_flow_style=False,
                    sort_keys=True,
                    allow_unicode=True,
                )
        except (OSError, yaml.YAMLError) as e:
            raise HashStoreError(f"Failed to save hash store {path}: {e}") from e
        logger.debug(f"Saved hash store with {len(self)} hashes to {path}")


def _read_section(data: dict, key: str) -> dict[str, str]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise HashStoreError(f"Hash store section '{key}' must be a mapping")
    return {str(k): str(v) for k, v in section.items()}
