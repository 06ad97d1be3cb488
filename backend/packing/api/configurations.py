"""GET /api/configurations/* — browse the catalog and analyse its entries."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from packing.catalog import Catalog
from packing.dependencies import get_catalog
from packing.engine.analysis import analyze_configuration
from packing.models.convert import analysis_to_response, configuration_to_model
from packing.models.responses import (
    AnalysisResponse,
    CatalogStatsResponse,
    ConfigurationListResponse,
    ConfigurationModel,
)

router = APIRouter(prefix="/configurations")


@router.get("", response_model=ConfigurationListResponse)
async def list_configurations(
    size: int | None = None,
    catalog: Catalog = Depends(get_catalog),
) -> ConfigurationListResponse:
    names = catalog.names() if size is None else catalog.names_by_size(size)
    return ConfigurationListResponse(names=names)


@router.get("/stats", response_model=CatalogStatsResponse)
async def catalog_stats(catalog: Catalog = Depends(get_catalog)) -> CatalogStatsResponse:
    total, by_size = catalog.stats()
    return CatalogStatsResponse(total=total, by_size=by_size)


@router.get("/{name}", response_model=ConfigurationModel)
async def get_configuration(name: str, catalog: Catalog = Depends(get_catalog)) -> ConfigurationModel:
    return configuration_to_model(catalog.get(name))


@router.get("/{name}/analysis", response_model=AnalysisResponse)
async def analyze_named(name: str, catalog: Catalog = Depends(get_catalog)) -> AnalysisResponse:
    config = catalog.get(name)
    start = time.perf_counter()
    # Dense linear algebra: keep it off the event loop
    result = await run_in_threadpool(analyze_configuration, config)
    elapsed = (time.perf_counter() - start) * 1000
    return analysis_to_response(result, name=name, processing_time_ms=elapsed)
