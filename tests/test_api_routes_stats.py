"""
Test Suite for API Routes - Statistics

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
from fastapi import HTTPException

from api.routes import stats as stats_route
from engine.enums import Trend
from services import pipeline_service


@pytest.mark.asyncio
async def test_overview_route(sample_table):
    await pipeline_service.run_ingest(sample_table, "s1")
    resp = await stats_route.stats_overview(dataset="s1")
    assert resp.record_count == 12
    assert resp.most_used.transport_type == "bus"
    assert resp.most_used.total == 420.0
    assert resp.least_used.transport_type == "ferry"
    assert resp.first_year == 2016 and resp.last_year == 2019
    assert resp.yearly_variations[0].year == 2017
    assert resp.yearly_variations[0].variation_pct == 4.67


@pytest.mark.asyncio
async def test_overview_route_on_empty_dataset():
    resp = await stats_route.stats_overview(dataset="nothing")
    assert resp.record_count == 0
    assert resp.most_used is None
    assert resp.peak_year is None


@pytest.mark.asyncio
async def test_stats_for_type_route(sample_table):
    await pipeline_service.run_ingest(sample_table, "s1")
    resp = await stats_route.stats_for_type("tram", dataset="s1")
    assert resp.max_value == 50.0 and resp.max_year == 2016
    assert resp.min_value == 35.0 and resp.min_year == 2019
    assert resp.trend == Trend.decreasing
    assert resp.variations[0].variation_pct == -10.0


@pytest.mark.asyncio
async def test_stats_for_type_zero_baseline(sample_table):
    await pipeline_service.run_ingest(sample_table, "s1")
    resp = await stats_route.stats_for_type("ferry", dataset="s1")
    assert resp.variations[0].no_baseline is True
    assert resp.variations[0].variation_pct is None
    assert resp.variations[1].variation_pct == 100.0


@pytest.mark.asyncio
async def test_stats_for_unknown_type_is_404(sample_table):
    await pipeline_service.run_ingest(sample_table, "s1")
    with pytest.raises(HTTPException) as exc:
        await stats_route.stats_for_type("hovercraft", dataset="s1")
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_stats_read_failure_is_503(sample_table, fake_redis):
    await pipeline_service.run_ingest(sample_table, "s1")
    fake_redis.fail_reads = True
    with pytest.raises(HTTPException) as exc:
        await stats_route.stats_for_type("tram", dataset="s1")
    assert exc.value.status_code == 503
