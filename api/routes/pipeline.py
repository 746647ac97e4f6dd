"""
Batch job routes: ingest the wide source table, regenerate forecasts, or
run both in sequence.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.requests import ForecastRequest, IngestRequest
from api.responses import ForecastRunResponse, IngestResponse, PipelineResponse
from api.routes.common import resolve_dataset
from api.routes.exception import handle_exceptions
from services import pipeline_service
from services.pipeline_service import ForecastRunResult, IngestResult

router = APIRouter(tags=["Pipeline"])


def _ingest_response(result: IngestResult) -> IngestResponse:
    return IngestResponse(
        dataset=result.dataset,
        records_loaded=result.records_loaded,
        transport_types=list(result.transport_types),
        rows=result.rows,
    )


def _forecast_response(result: ForecastRunResult) -> ForecastRunResponse:
    return ForecastRunResponse(
        dataset=result.dataset,
        types_forecast=result.types_forecast,
        types_failed=list(result.types_failed),
        predictions=result.predictions,
        failures=dict(result.failures),
    )


@router.post("/ingest", response_model=IngestResponse, summary="Replace the passenger records from a wide source table")
@handle_exceptions
async def ingest(req: IngestRequest) -> IngestResponse:
    result = await pipeline_service.run_ingest(req.source_text, resolve_dataset(req.dataset))
    return _ingest_response(result)


@router.post("/forecast", response_model=ForecastRunResponse, summary="Regenerate forecasts for every transport type")
@handle_exceptions
async def forecast(req: ForecastRequest) -> ForecastRunResponse:
    result = await pipeline_service.run_forecast(resolve_dataset(req.dataset))
    return _forecast_response(result)


@router.post("/pipeline", response_model=PipelineResponse, summary="Ingest, then regenerate forecasts")
@handle_exceptions
async def pipeline(req: IngestRequest) -> PipelineResponse:
    ingested, forecasted = await pipeline_service.ingest_and_forecast(req.source_text, resolve_dataset(req.dataset))
    return PipelineResponse(ingest=_ingest_response(ingested), forecast=_forecast_response(forecasted))
