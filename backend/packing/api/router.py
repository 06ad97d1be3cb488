"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from packing.api import analyze, configurations, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(configurations.router)
api_router.include_router(analyze.router)
