"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rfs.config import Settings, settings

if TYPE_CHECKING:
    from rfs.services.file_cache import FileCache
    from rfs.services.file_router import FileRouter
    from rfs.services.selector import Selector

logger = logging.getLogger(__name__)

_file_cache: FileCache | None = None
_selector: Selector | None = None
_file_router: FileRouter | None = None


def init_services(config: Settings | None = None) -> None:
    """Create and wire up the cache, selector and router."""
    global _file_cache, _selector, _file_router

    from rfs.services.file_cache import FileCache
    from rfs.services.file_router import FileRouter
    from rfs.services.selector import Selector

    config = config or settings

    _file_cache = FileCache(
        config.files_path,
        ttl=config.cache_ttl_secs,
        segment=config.files_segment,
    )
    _selector = Selector(non_repeat=config.non_repeat)
    _file_router = FileRouter(
        _file_cache,
        _selector,
        listing_path=config.listing_path,
        files_segment=config.files_segment,
    )

    if not config.files_path.is_dir():
        logger.warning(
            "Files directory %s does not exist, every request will fail until it is created",
            config.files_path,
        )
    logger.info("File services initialized for %s", config.files_path)


def shutdown_services() -> None:
    """Drop service singletons; state is rebuilt from disk on next start."""
    global _file_cache, _selector, _file_router
    _file_cache = None
    _selector = None
    _file_router = None


def get_file_cache() -> FileCache:
    if _file_cache is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _file_cache


def get_selector() -> Selector:
    if _selector is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _selector


def get_file_router() -> FileRouter:
    if _file_router is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _file_router
