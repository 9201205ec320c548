"""Cache statistics routes."""

from fastapi import APIRouter

from rfs.schemas.cache import CacheStats
from rfs.services import get_file_cache, get_selector

router = APIRouter()


@router.get("/stats", response_model=CacheStats)
def cache_stats():
    """Snapshot size and age. May trigger a refresh when the TTL has elapsed."""
    cache = get_file_cache()
    snapshot = cache.snapshot()

    age = cache.seconds_since_refresh()

    return CacheStats(
        total_files=len(snapshot),
        total_size_bytes=sum(entry.size for entry in snapshot),
        ttl_seconds=int(cache.ttl),
        last_refreshed_seconds_ago=round(age, 1) if age is not None else None,
        used_files=get_selector().used_count,
    )
