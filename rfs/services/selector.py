"""Random pick strategy with optional non-repeat mode."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from rfs.errors import EmptySetError
from rfs.schemas.files import FileEntry

logger = logging.getLogger(__name__)


class Selector:
    """Picks a file uniformly at random from a snapshot.

    In non-repeat mode every path of the current snapshot is handed out once
    before any path repeats. Paths that vanish on a refresh stay in the used
    set but never match again.
    """

    def __init__(self, non_repeat: bool = False, rng: random.Random | None = None):
        self._non_repeat = non_repeat
        self._rng = rng or random.Random()
        self._used: set[str] = set()

    @property
    def non_repeat(self) -> bool:
        return self._non_repeat

    @property
    def used_count(self) -> int:
        return len(self._used)

    def reset(self) -> None:
        self._used.clear()

    def pick(self, snapshot: Sequence[FileEntry]) -> FileEntry:
        """Draw one entry. Raises EmptySetError if the snapshot is empty."""
        if not snapshot:
            raise EmptySetError("No files available")

        if not self._non_repeat:
            return snapshot[self._rng.randrange(len(snapshot))]

        unused = [entry for entry in snapshot if entry.path not in self._used]
        if not unused:
            logger.debug("All %d files served, starting a new round", len(snapshot))
            self._used.clear()
            unused = list(snapshot)

        entry = unused[self._rng.randrange(len(unused))]
        self._used.add(entry.path)
        return entry
