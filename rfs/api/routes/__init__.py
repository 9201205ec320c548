"""API route registration."""

from fastapi import APIRouter

from rfs.api.routes import cache, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
