"""
Test Suite for API Routes - Predictions

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from api.routes import predictions as predictions_route
from engine.enums import SeriesKind
from services import pipeline_service


@pytest.mark.asyncio
async def test_list_predictions(sample_table):
    await pipeline_service.ingest_and_forecast(sample_table, "p1")
    rows = await predictions_route.list_predictions(dataset="p1", transport_type=None)
    assert len(rows) == 15
    assert all(0.0 <= r.confidence_level <= 1.0 for r in rows)


@pytest.mark.asyncio
async def test_list_predictions_filtered_by_type(sample_table):
    await pipeline_service.ingest_and_forecast(sample_table, "p1")
    rows = await predictions_route.list_predictions(dataset="p1", transport_type="ferry")
    assert [r.prediction_year for r in rows] == [2020, 2021, 2022, 2023, 2024]
    assert rows[0].predicted_passengers == pytest.approx(8.0)
    assert rows[0].confidence_level == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_list_predictions_before_any_forecast():
    assert await predictions_route.list_predictions(dataset="p2", transport_type=None) == []


@pytest.mark.asyncio
async def test_prediction_summary_route(sample_table):
    await pipeline_service.ingest_and_forecast(sample_table, "p1")
    rows = await predictions_route.prediction_summary(dataset="p1")
    assert [r.transport_type for r in rows][0] == "bus"
    assert all(r.horizon == 5 and r.final_year == 2024 for r in rows)


@pytest.mark.asyncio
async def test_prediction_timeline_route(sample_table):
    await pipeline_service.ingest_and_forecast(sample_table, "p1")
    rows = await predictions_route.prediction_timeline(dataset="p1")
    assert [r.year for r in rows] == list(range(2016, 2025))
    assert rows[0].kind == SeriesKind.historical
    assert rows[-1].kind == SeriesKind.prediction
    assert "bus_pred" in rows[-1].values
    assert rows[0].values["bus"] == 100.0
