"""Directory scanning utilities for sync operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class LocalFile:
    """Represents a local file with metadata."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    size: int
    """File size in bytes"""

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Base path for calculating relative paths

        Returns:
            LocalFile instance
        """
        # Use as_posix() to ensure forward slashes on all platforms
        relative_path = file_path.relative_to(base_path).as_posix()
        return cls(
            path=file_path,
            relative_path=relative_path,
            size=file_path.stat().st_size,
        )

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def depth(self) -> int:
        """Number of path segments in the relative path."""
        return len(self.relative_path.split("/"))


class DirectoryScanner:
    """Recursively lists the regular files of a folder.

    Symbolic links and unreadable entries are skipped.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.scan_local(Path("/sync/folder"))
        >>> ordered = DirectoryScanner.order_deepest_first(files)
    """

    def scan_local(
        self, directory: Path, base_path: Optional[Path] = None
    ) -> list[LocalFile]:
        """Recursively scan a local directory.

        Args:
            directory: Directory to scan
            base_path: Base path for calculating relative paths (defaults to directory)

        Returns:
            List of LocalFile objects in directory order
        """
        if base_path is None:
            base_path = directory

        files: list[LocalFile] = []

        try:
            for item in sorted(directory.iterdir()):
                if item.is_symlink():
                    continue
                if item.is_file():
                    try:
                        files.append(LocalFile.from_path(item, base_path))
                    except OSError as e:
                        logger.debug(f"Skipping unreadable file {item}: {e}")
                elif item.is_dir():
                    files.extend(self.scan_local(item, base_path))
        except PermissionError as e:
            logger.warning(f"Permission denied: {e}")

        return files

    def count_files(self, folders: list[str]) -> int:
        """Count regular files in all existing folders."""
        total = 0
        for folder in folders:
            folder_path = Path(folder)
            if folder_path.is_dir():
                total += len(self.scan_local(folder_path))
        return total

    @staticmethod
    def order_deepest_first(files: list[LocalFile]) -> list[LocalFile]:
        """Order files so that the most deeply nested come first."""
        return sorted(files, key=lambda f: (-f.depth, f.relative_path))
