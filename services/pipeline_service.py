"""
Ingest and forecast orchestration over the passenger and prediction stores,
plus the read-side statistics views used by the API.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from config import settings
from engine.forecast import ForecastBatch, PredictionSummary, TimelineRow, forecast_all, summarize, timeline
from engine.ingest import parse_wide_table
from engine.records import ForecastRecord
from engine.stats import DatasetOverview, SeriesStats, overview, stats_for
from store import passengers, predictions

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    dataset: str
    records_loaded: int
    transport_types: Tuple[str, ...]
    rows: int


@dataclass(frozen=True)
class ForecastRunResult:
    dataset: str
    types_forecast: int
    types_failed: Tuple[str, ...]
    predictions: int
    failures: Dict[str, str] = field(default_factory=dict)


def _dataset(dataset: Optional[str]) -> str:
    return dataset or settings.default_dataset


def load_source_text(path: Optional[str] = None) -> str:
    return Path(path or settings.source_path).read_text(encoding="utf-8")


async def run_ingest(source_text: Optional[str] = None, dataset: Optional[str] = None) -> IngestResult:
    dataset = _dataset(dataset)
    if source_text is None:
        source_text = load_source_text()

    # parse everything before the store is touched
    table = parse_wide_table(source_text)
    log.info("Transformed %d records (%d rows x %d types)", len(table.records), table.row_count, len(table.transport_types))

    loaded = await passengers.replace_all(dataset, table.records)
    log.info("Ingest into %s completed: %d records", dataset, loaded)
    return IngestResult(
        dataset=dataset,
        records_loaded=loaded,
        transport_types=table.transport_types,
        rows=table.row_count,
    )


async def run_forecast(dataset: Optional[str] = None) -> ForecastRunResult:
    dataset = _dataset(dataset)
    history = await passengers.read_all(dataset)
    batch: ForecastBatch = forecast_all(history)
    records = batch.records

    await predictions.replace_all(dataset, records)
    if batch.failures:
        log.warning("Forecast for %s failed for %d type(s): %s", dataset, len(batch.failures), ", ".join(batch.types_failed))
    log.info("Generated %d predictions for %d type(s) in %s", len(records), batch.types_forecast, dataset)
    return ForecastRunResult(
        dataset=dataset,
        types_forecast=batch.types_forecast,
        types_failed=tuple(batch.types_failed),
        predictions=len(records),
        failures=dict(batch.failures),
    )


async def ingest_and_forecast(
    source_text: Optional[str] = None, dataset: Optional[str] = None
) -> Tuple[IngestResult, ForecastRunResult]:
    ingested = await run_ingest(source_text, dataset)
    return ingested, await run_forecast(ingested.dataset)


async def get_overview(dataset: Optional[str] = None) -> DatasetOverview:
    return overview(await passengers.read_all(_dataset(dataset)))


async def get_series_stats(transport_type: str, dataset: Optional[str] = None) -> SeriesStats:
    return stats_for(await passengers.read_all(_dataset(dataset)), transport_type)


async def get_predictions(dataset: Optional[str] = None) -> List[ForecastRecord]:
    return await predictions.read_all(_dataset(dataset))


async def get_prediction_summary(dataset: Optional[str] = None) -> List[PredictionSummary]:
    return summarize(await predictions.read_all(_dataset(dataset)))


async def get_timeline(dataset: Optional[str] = None) -> List[TimelineRow]:
    dataset = _dataset(dataset)
    return timeline(await passengers.read_all(dataset), await predictions.read_all(dataset))
