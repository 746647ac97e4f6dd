"""
Descriptive statistics routes: dataset overview and per-type detail.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from api.responses import OverviewResponse, SeriesStatsResponse
from api.routes.common import query_value, resolve_dataset
from api.routes.exception import handle_exceptions
from services import pipeline_service

router = APIRouter(tags=["Statistics"])


@router.get("/stats/overview", response_model=OverviewResponse, summary="Totals, peak year and yearly variation across all types")
@handle_exceptions
async def stats_overview(dataset: Optional[str] = Query(default=None)) -> OverviewResponse:
    result = await pipeline_service.get_overview(resolve_dataset(query_value(dataset)))
    return OverviewResponse.of(result)


@router.get("/stats/{transport_type}", response_model=SeriesStatsResponse, summary="Extrema, mean, variation and trend for one type")
@handle_exceptions
async def stats_for_type(transport_type: str, dataset: Optional[str] = Query(default=None)) -> SeriesStatsResponse:
    result = await pipeline_service.get_series_stats(transport_type, resolve_dataset(query_value(dataset)))
    return SeriesStatsResponse.of(result)
