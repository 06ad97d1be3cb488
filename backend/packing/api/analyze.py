"""POST /api/analyze — analyse an explicit configuration."""

from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from packing.engine.analysis import analyze_configuration
from packing.engine.configuration import create_configuration
from packing.models.convert import analysis_to_response
from packing.models.requests import AnalyzeRequest
from packing.models.responses import AnalysisResponse

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(req: AnalyzeRequest) -> AnalysisResponse:
    config = create_configuration(
        req.positions,
        req.contacts,
        req.radius,
        lattice_contacts=req.lattice_contacts,
        lattice_shifts=req.lattice_shifts,
    )
    start = time.perf_counter()
    result = await run_in_threadpool(analyze_configuration, config)
    elapsed = (time.perf_counter() - start) * 1000
    return analysis_to_response(result, processing_time_ms=elapsed)
