"""TTL-refreshed snapshot of the served directory."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable

from rfs.errors import RefreshError
from rfs.schemas.files import FileEntry
from rfs.utils.natural_sort import natural_sorted

logger = logging.getLogger(__name__)

Snapshot = tuple[FileEntry, ...]


class FileCache:
    """Holds the sorted file list of one flat directory, re-scanned lazily.

    A refresh happens on access once ``ttl`` seconds have passed since the
    last successful scan. A failed scan keeps the previous snapshot and does
    not move the timestamp, so the next access tries again.
    """

    def __init__(
        self,
        directory: str | Path,
        ttl: float = 300,
        segment: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._directory = Path(directory)
        self._segment = segment or self._directory.name
        self._ttl = ttl
        self._clock = clock
        self._snapshot: Snapshot = ()
        self._last_refreshed: float | None = None
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def last_refreshed(self) -> float | None:
        """Clock value of the last successful refresh, None before the first."""
        return self._last_refreshed

    def seconds_since_refresh(self) -> float | None:
        if self._last_refreshed is None:
            return None
        return self._clock() - self._last_refreshed

    def is_stale(self) -> bool:
        if self._last_refreshed is None:
            return True
        return self._clock() >= self._last_refreshed + self._ttl

    def snapshot(self) -> Snapshot:
        """Return the current file list, refreshing first if the TTL elapsed.

        Refresh errors are logged and swallowed; the best available snapshot
        (possibly stale, possibly empty) is returned.
        """
        with self._lock:
            if self.is_stale():
                try:
                    self._refresh_locked()
                except RefreshError as e:
                    logger.error("File cache refresh failed: %s", e)
            return self._snapshot

    def refresh(self) -> Snapshot:
        """Force a re-scan. Raises RefreshError on failure."""
        with self._lock:
            self._refresh_locked()
            return self._snapshot

    def _refresh_locked(self) -> None:
        entries = self._scan()
        if not entries:
            raise RefreshError(f"No files found in {self._directory}")

        # Swap both together so readers never see a half-built state
        self._snapshot = tuple(natural_sorted(entries, key=lambda e: e.path, reverse=True))
        self._last_refreshed = self._clock()
        logger.info("File cache refreshed: %d files in %s", len(entries), self._directory)

    def _scan(self) -> list[FileEntry]:
        """Regular files only; unreadable files are skipped."""
        try:
            children = list(self._directory.iterdir())
        except OSError as e:
            raise RefreshError(f"Cannot read directory {self._directory}: {e}") from e

        entries = []
        for child in children:
            try:
                if child.is_symlink() or not child.is_file():
                    continue
                entries.append(FileEntry.from_disk(child.resolve(), self._segment))
            except OSError as e:
                logger.debug("Skipping %s: %s", child, e)
        return entries
