"""Spinner shown while a scan runs."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class ScanProgress:
    """Counts scanned entries; pass the instance as the builder's progress callback."""

    def __init__(self, console: Optional[Console] = None, refresh_every: int = 500):
        self.console = console or Console(stderr=True)
        self.refresh_every = refresh_every
        self._progress: Optional[Progress] = None
        self._task_id = None
        self.count = 0

    def __enter__(self) -> ScanProgress:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("0 files", total=None)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def __call__(self, count: int) -> None:
        self.count = count
        if self._progress is None or self._task_id is None:
            return
        if count % self.refresh_every == 0:
            self._progress.update(self._task_id, description=f"{count:,} files")
