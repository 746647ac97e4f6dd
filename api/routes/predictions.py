"""
Forecast read routes: stored predictions, per-type summary and the merged
historical-plus-forecast timeline.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from api.responses import ForecastRecordModel, PredictionSummaryModel, TimelineRowModel
from api.routes.common import query_value, resolve_dataset
from api.routes.exception import handle_exceptions
from services import pipeline_service

router = APIRouter(tags=["Predictions"])


@router.get("/predictions", response_model=List[ForecastRecordModel])
@handle_exceptions
async def list_predictions(
    dataset: Optional[str] = Query(default=None),
    transport_type: Optional[str] = Query(default=None),
) -> List[ForecastRecordModel]:
    transport_type = query_value(transport_type)
    records = await pipeline_service.get_predictions(resolve_dataset(query_value(dataset)))
    return [
        ForecastRecordModel.of(r) for r in records
        if transport_type is None or r.transport_type == transport_type
    ]


@router.get("/predictions/summary", response_model=List[PredictionSummaryModel])
@handle_exceptions
async def prediction_summary(dataset: Optional[str] = Query(default=None)) -> List[PredictionSummaryModel]:
    rows = await pipeline_service.get_prediction_summary(resolve_dataset(query_value(dataset)))
    return [PredictionSummaryModel.of(s) for s in rows]


@router.get("/predictions/timeline", response_model=List[TimelineRowModel])
@handle_exceptions
async def prediction_timeline(dataset: Optional[str] = Query(default=None)) -> List[TimelineRowModel]:
    rows = await pipeline_service.get_timeline(resolve_dataset(query_value(dataset)))
    return [TimelineRowModel.of(r) for r in rows]
