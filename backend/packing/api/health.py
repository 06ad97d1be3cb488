"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from packing import __version__
from packing.catalog import Catalog
from packing.dependencies import get_catalog
from packing.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(catalog: Catalog = Depends(get_catalog)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        configurations_loaded=len(catalog),
    )
