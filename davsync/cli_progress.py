"""CLI progress display for sync operations.

This module provides a Rich-based progress bar that is driven by the
``progress_callback`` of the sync engine.
"""

from typing import Optional

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


class SyncProgressDisplay:
    """Rich-based progress display counting processed files.

    Every file of the run advances the bar once, whether it was uploaded
    or skipped.
    """

    def __init__(self) -> None:
        """Initialize the progress display."""
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def callback(self, completed: int, total: int) -> None:
        """Progress callback for the sync engine.

        Args:
            completed: Files processed so far
            total: Files in all synced folders
        """
        if self._progress is None or self._task is None:
            return
        self._progress.update(self._task, completed=completed, total=total)

    def __enter__(self) -> "SyncProgressDisplay":
        """Enter context manager - start progress display."""
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            refresh_per_second=4,
        )
        self._progress.__enter__()
        self._task = self._progress.add_task("Syncing files", total=None)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - stop progress display."""
        if self._progress is not None:
            if self._task is not None:
                description = "Sync failed" if exc_type else "Sync complete"
                self._progress.update(self._task, description=description)
            self._progress.__exit__(exc_type, exc_val, exc_tb)
            self._progress = None
            self._task = None
