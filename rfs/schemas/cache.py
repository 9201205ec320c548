"""Cache statistics schemas."""

from pydantic import BaseModel


class CacheStats(BaseModel):
    """File cache and selector state."""
    total_files: int
    total_size_bytes: int
    ttl_seconds: int
    last_refreshed_seconds_ago: float | None = None  # None until first successful scan
    used_files: int = 0  # Non-repeat mode only
