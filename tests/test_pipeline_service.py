"""
Test cases for ingest and forecast orchestration over the stores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.exceptions import ParseError, StorageError
from services import pipeline_service
from store import passengers, predictions


@pytest.mark.asyncio
async def test_ingest_loads_all_records(sample_table):
    result = await pipeline_service.run_ingest(sample_table, "d1")
    assert result.records_loaded == 12
    assert result.transport_types == ("bus", "tram", "ferry")
    assert result.rows == 4
    assert len(await passengers.read_all("d1")) == 12


@pytest.mark.asyncio
async def test_ingest_twice_is_idempotent(sample_table):
    await pipeline_service.run_ingest(sample_table, "d1")
    await pipeline_service.run_ingest(sample_table, "d1")
    assert len(await passengers.read_all("d1")) == 12


@pytest.mark.asyncio
async def test_ingest_defaults_to_bundled_source():
    result = await pipeline_service.run_ingest()
    assert result.records_loaded == 208
    assert len(await passengers.read_all(result.dataset)) == 208


@pytest.mark.asyncio
async def test_parse_error_leaves_store_untouched(sample_table):
    await pipeline_service.run_ingest(sample_table, "d1")
    with pytest.raises(ParseError):
        await pipeline_service.run_ingest("year;bus\n2020;x\n", "d1")
    assert len(await passengers.read_all("d1")) == 12


@pytest.mark.asyncio
async def test_forecast_run(sample_table):
    await pipeline_service.run_ingest(sample_table, "d1")
    result = await pipeline_service.run_forecast("d1")
    assert result.types_forecast == 3
    assert result.types_failed == ()
    assert result.predictions == 15
    stored = await predictions.read_all("d1")
    assert len(stored) == 15
    assert min(r.prediction_year for r in stored) == 2020
    assert all(r.predicted_passengers >= 0 for r in stored)


@pytest.mark.asyncio
async def test_forecast_replaces_previous_predictions(sample_table):
    await pipeline_service.run_ingest(sample_table, "d1")
    await pipeline_service.run_forecast("d1")
    await pipeline_service.run_ingest("year;bus\n2000;1\n2001;2\n", "d1")
    await pipeline_service.run_forecast("d1")
    stored = await predictions.read_all("d1")
    assert {r.transport_type for r in stored} == {"bus"}
    assert len(stored) == 5


@pytest.mark.asyncio
async def test_forecast_reports_short_series():
    await pipeline_service.run_ingest("year;bus;ferry\n2020;5;3\n", "d1")
    result = await pipeline_service.run_forecast("d1")
    assert result.types_forecast == 0
    assert result.types_failed == ("bus", "ferry")
    assert set(result.failures) == {"bus", "ferry"}
    assert await predictions.read_all("d1") == []


@pytest.mark.asyncio
async def test_forecast_on_empty_store():
    result = await pipeline_service.run_forecast("empty")
    assert result.types_forecast == 0
    assert result.predictions == 0


@pytest.mark.asyncio
async def test_storage_error_on_prediction_write_is_fatal(sample_table, monkeypatch):
    await pipeline_service.run_ingest(sample_table, "d1")

    async def broken(dataset, records):
        raise StorageError("disk full", dataset=dataset)

    monkeypatch.setattr(pipeline_service.predictions, "replace_all", broken)
    with pytest.raises(StorageError):
        await pipeline_service.run_forecast("d1")


@pytest.mark.asyncio
async def test_ingest_and_forecast(sample_table):
    ingested, forecasted = await pipeline_service.ingest_and_forecast(sample_table, "d1")
    assert ingested.records_loaded == 12
    assert forecasted.predictions == 15


@pytest.mark.asyncio
async def test_read_views(sample_table):
    await pipeline_service.ingest_and_forecast(sample_table, "d1")
    ov = await pipeline_service.get_overview("d1")
    assert ov.most_used[0] == "bus"
    stats = await pipeline_service.get_series_stats("tram", "d1")
    assert stats.total == 170.0
    summary = await pipeline_service.get_prediction_summary("d1")
    assert {s.transport_type for s in summary} == {"bus", "tram", "ferry"}
    rows = await pipeline_service.get_timeline("d1")
    assert rows[0].year == 2016 and rows[-1].year == 2024


@pytest.mark.asyncio
async def test_read_failure_keeps_stored_predictions(sample_table, fake_redis):
    await pipeline_service.ingest_and_forecast(sample_table, "d1")
    stored = list(fake_redis.lists["pt:d1:predictions"])
    assert len(stored) == 15

    fake_redis.fail_reads = True
    with pytest.raises(StorageError):
        await passengers.read_all("d1")
    with pytest.raises(StorageError):
        await pipeline_service.run_forecast("d1")
    assert fake_redis.lists["pt:d1:predictions"] == stored
