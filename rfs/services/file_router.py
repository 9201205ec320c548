"""Per-request routing: random file, explicit file or listing page."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Union

from rfs.errors import EmptySetError, FileIOError, NotFoundError, ServeError
from rfs.schemas.files import FileEntry
from rfs.services.file_cache import FileCache, Snapshot
from rfs.services.listing import Listing, render_listing
from rfs.services.selector import Selector

logger = logging.getLogger(__name__)

FAVICON_PREFIX = "/favicon.ico"


@dataclass(frozen=True)
class FileReply:
    entry: FileEntry
    stat: os.stat_result


@dataclass(frozen=True)
class ListingReply:
    html: str


@dataclass(frozen=True)
class NoReply:
    """The request ends without a body; ``reason`` is an error kind or "favicon"."""
    reason: str


Reply = Union[FileReply, ListingReply, NoReply]


def decode_file_path(raw: str) -> str:
    """Undo the space escaping used in listing links.

    ``%20`` becomes a space and ``+`` is dropped entirely (not turned into a
    space), which is how file links have always been decoded.
    """
    return raw.replace("%20", " ").replace("+", "")


def parse_page(query: str) -> int:
    """Page number from a ``page=<n>`` query segment, 1 when absent or bad."""
    for segment in query.split("&"):
        key, sep, value = segment.partition("=")
        if sep and key == "page":
            try:
                return int(value.strip())
            except ValueError:
                return 1
    return 1


class FileRouter:
    """Owns the cache and selector and serialises access to them."""

    def __init__(
        self,
        cache: FileCache,
        selector: Selector,
        listing_path: str | None = None,
        files_segment: str | None = None,
    ):
        self._cache = cache
        self._selector = selector
        self._listing_path = listing_path.strip("/") if listing_path is not None else None
        segment = (files_segment or cache.directory.name).strip("/")
        self._file_prefix = f"/{segment}/"
        self._lock = threading.Lock()

    @property
    def cache(self) -> FileCache:
        return self._cache

    @property
    def selector(self) -> Selector:
        return self._selector

    @property
    def listing_enabled(self) -> bool:
        return self._listing_path is not None

    def dispatch(self, path: str, query: str = "") -> Reply:
        """Route a request, turning any ServeError into a logged NoReply."""
        try:
            return self.handle(path, query)
        except ServeError as e:
            logger.error("Error while processing request %s: %s", path, e)
            return NoReply(reason=e.kind)

    def handle(self, path: str, query: str = "") -> Reply:
        """Route a request. Raises ServeError subclasses on failure."""
        if path.startswith(FAVICON_PREFIX):
            logger.debug("Ignoring %s", path)
            return NoReply(reason="favicon")

        if self.listing_enabled and path.startswith(self._file_prefix):
            return self._explicit_file(path)

        if self.listing_enabled and path.strip("/") == self._listing_path:
            return self._listing(query)

        return self._random_file()

    def _current(self) -> Snapshot:
        with self._lock:
            snapshot = self._cache.snapshot()
        if not snapshot:
            raise EmptySetError("No files available")
        return snapshot

    def _explicit_file(self, path: str) -> FileReply:
        wanted = decode_file_path(path[1:])
        snapshot = self._current()
        for entry in snapshot:
            if entry.path == wanted:
                return FileReply(entry=entry, stat=_open_stat(entry))
        raise NotFoundError(f"No file matches {wanted!r}")

    def _listing(self, query: str) -> ListingReply:
        page = parse_page(query)
        snapshot = self._current()
        listing = Listing.build(snapshot, page)
        return ListingReply(html=render_listing(listing))

    def _random_file(self) -> FileReply:
        with self._lock:
            snapshot = self._cache.snapshot()
            entry = self._selector.pick(snapshot)
        logger.debug("Serving %s", entry.path)
        return FileReply(entry=entry, stat=_open_stat(entry))


def _open_stat(entry: FileEntry) -> os.stat_result:
    """Open the file to make sure it is still servable and stat it."""
    try:
        with open(entry.location, "rb") as fh:
            return os.fstat(fh.fileno())
    except OSError as e:
        raise FileIOError(f"Cannot open {entry.path}: {e}") from e
