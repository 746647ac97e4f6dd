"""
Company research routes: trigger a fresh analysis for a transport type or
read back the stored one.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from api.responses import CompanyAnalysisResponse
from api.routes.common import query_value, resolve_dataset
from api.routes.exception import handle_exceptions
from services.research_service import research_service

router = APIRouter(tags=["Research"])


@router.post("/research/{transport_type}", response_model=CompanyAnalysisResponse)
@handle_exceptions
async def run_research(transport_type: str, dataset: Optional[str] = Query(default=None)) -> CompanyAnalysisResponse:
    if not transport_type.strip():
        raise HTTPException(status_code=400, detail="Transport type is required")
    saved = await research_service.research(transport_type, resolve_dataset(query_value(dataset)))
    return CompanyAnalysisResponse(**saved)


@router.get("/research/{transport_type}", response_model=CompanyAnalysisResponse)
@handle_exceptions
async def get_research(transport_type: str, dataset: Optional[str] = Query(default=None)) -> CompanyAnalysisResponse:
    stored = await research_service.get(transport_type, resolve_dataset(query_value(dataset)))
    if stored is None:
        raise HTTPException(status_code=404, detail=f"No analysis stored for '{transport_type}'")
    return CompanyAnalysisResponse(**stored)
