"""Service status schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    service: str = "rfs"
    listing_enabled: bool = False
    non_repeat: bool = False
