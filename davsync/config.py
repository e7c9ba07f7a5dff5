"""Configuration loading for davsync.

The configuration is a YAML document::

    webdav_url: "https://cloud.example.com/remote.php/dav/files/me"
    username: "me"
    password: "secret"
    folders:
      - "/home/me/Pictures"
    hash_store_path: "hashes.yaml"
    remote_hash_path: "hashes.yaml"
    timeout_secs: 3
    target_dir: "phone"
    use_pseudo_hash: false
    show_progress: false

Credentials missing from the file are read from the ``DAVSYNC_USERNAME``
and ``DAVSYNC_PASSWORD`` environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import DavSyncConfigError
from .sync.modes import HashMode
from .utils import (
    DEFAULT_HASH_STORE_PATH,
    DEFAULT_REMOTE_HASH_PATH,
    DEFAULT_TIMEOUT_SECS,
)

logger = logging.getLogger(__name__)

USERNAME_ENV = "DAVSYNC_USERNAME"
PASSWORD_ENV = "DAVSYNC_PASSWORD"


@dataclass
class SyncConfig:
    """Validated settings for one sync run."""

    webdav_url: str
    """Base URL of the WebDAV endpoint"""

    folders: list[str] = field(default_factory=list)
    """Local folders to mirror, processed in order"""

    username: Optional[str] = None
    password: Optional[str] = None

    hash_store_path: str = DEFAULT_HASH_STORE_PATH
    """Local file the hash store is persisted to"""

    remote_hash_path: str = DEFAULT_REMOTE_HASH_PATH
    """Remote path the hash store is published to"""

    timeout_secs: float = DEFAULT_TIMEOUT_SECS
    """Timeout applied to each HTTP request"""

    target_dir: str = ""
    """Optional remote directory all files are placed under"""

    use_pseudo_hash: bool = False
    show_progress: bool = False

    @property
    def hash_mode(self) -> HashMode:
        """Fingerprint mode selected by ``use_pseudo_hash``."""
        return HashMode.from_flag(self.use_pseudo_hash)

    def validate(self) -> None:
        """Validate required fields.

        Raises:
            DavSyncConfigError: If a field is missing or invalid
        """
        if not isinstance(self.webdav_url, str) or not self.webdav_url.strip():
            raise DavSyncConfigError("webdav_url cannot be empty")
        if not isinstance(self.folders, list) or not self.folders:
            raise DavSyncConfigError("folders list cannot be empty")
        for folder in self.folders:
            if not isinstance(folder, str) or not folder.strip():
                raise DavSyncConfigError("folder path cannot be empty")
        if not self.hash_store_path or not str(self.hash_store_path).strip():
            raise DavSyncConfigError("hash_store_path cannot be empty")
        if not self.remote_hash_path or not str(self.remote_hash_path).strip():
            raise DavSyncConfigError("remote_hash_path cannot be empty")
        if isinstance(self.timeout_secs, bool) or not isinstance(
            self.timeout_secs, (int, float)
        ):
            raise DavSyncConfigError("timeout_secs must be a number")
        if self.timeout_secs <= 0:
            raise DavSyncConfigError("timeout_secs must be positive")

    @classmethod
    def from_dict(cls, data: Any) -> "SyncConfig":
        """Build and validate a configuration from parsed YAML.

        Raises:
            DavSyncConfigError: If the data is not a valid configuration
        """
        if not isinstance(data, dict):
            raise DavSyncConfigError("configuration must be a YAML mapping")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", unknown)

        if "webdav_url" not in data:
            raise DavSyncConfigError("webdav_url is required")

        values = {key: value for key, value in data.items() if key in known}
        for key in ("hash_store_path", "remote_hash_path", "target_dir"):
            if values.get(key) is None:
                values.pop(key, None)
        for key in ("use_pseudo_hash", "show_progress"):
            if key in values and not isinstance(values[key], bool):
                raise DavSyncConfigError(f"{key} must be true or false")

        config = cls(**values)
        if config.username is None:
            config.username = os.environ.get(USERNAME_ENV)
        if config.password is None:
            config.password = os.environ.get(PASSWORD_ENV)

        config.validate()
        return config

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SyncConfig":
        """Load the configuration from a YAML file and validate it.

        Raises:
            DavSyncConfigError: If the file is unreadable or invalid
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise DavSyncConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise DavSyncConfigError(f"Invalid YAML in {path}: {e}") from e

        return cls.from_dict(data)
