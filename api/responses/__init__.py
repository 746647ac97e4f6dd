"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.enums import SeriesKind, Trend
from engine.forecast import PredictionSummary, TimelineRow
from engine.records import ForecastRecord
from engine.stats import DatasetOverview, SeriesStats, VariationPoint


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class IngestResponse(NpModel):

    dataset: str
    records_loaded: int
    transport_types: List[str]
    rows: int


class ForecastRunResponse(NpModel):

    dataset: str
    types_forecast: int
    types_failed: List[str]
    predictions: int
    failures: Dict[str, str] = Field(default_factory=dict)


class PipelineResponse(NpModel):

    ingest: IngestResponse
    forecast: ForecastRunResponse


class VariationPointModel(NpModel):

    year: int
    variation_pct: Optional[float]
    no_baseline: bool

    @classmethod
    def of(cls, v: VariationPoint) -> VariationPointModel:
        return cls(year=v.year, variation_pct=v.variation_pct, no_baseline=v.no_baseline)


class TypeTotal(NpModel):

    transport_type: str
    total: float


class YearTotal(NpModel):

    year: int
    total: float


class SeriesStatsResponse(NpModel):

    transport_type: str
    observations: int
    total: float
    average: float
    max_value: float
    max_year: int
    min_value: float
    min_year: int
    variations: List[VariationPointModel]
    slope: Optional[float] = None
    trend: Optional[Trend] = None

    @classmethod
    def of(cls, s: SeriesStats) -> SeriesStatsResponse:
        return cls(
            transport_type=s.transport_type,
            observations=s.observations,
            total=s.total,
            average=s.average,
            max_value=s.max_value,
            max_year=s.max_year,
            min_value=s.min_value,
            min_year=s.min_year,
            variations=[VariationPointModel.of(v) for v in s.variations],
            slope=s.slope,
            trend=s.trend,
        )


class OverviewResponse(NpModel):

    record_count: int
    transport_types: List[str]
    first_year: Optional[int] = None
    last_year: Optional[int] = None
    most_used: Optional[TypeTotal] = None
    least_used: Optional[TypeTotal] = None
    peak_year: Optional[YearTotal] = None
    totals_by_type: List[TypeTotal]
    totals_by_year: List[YearTotal]
    yearly_variations: List[VariationPointModel]
    average_variation_pct: Optional[float] = None

    @classmethod
    def of(cls, o: DatasetOverview) -> OverviewResponse:
        def _type_total(item):
            return TypeTotal(transport_type=item[0], total=item[1]) if item else None

        def _year_total(item):
            return YearTotal(year=item[0], total=item[1]) if item else None

        return cls(
            record_count=o.record_count,
            transport_types=list(o.transport_types),
            first_year=o.first_year,
            last_year=o.last_year,
            most_used=_type_total(o.most_used),
            least_used=_type_total(o.least_used),
            peak_year=_year_total(o.peak_year),
            totals_by_type=[_type_total(t) for t in o.totals_by_type],
            totals_by_year=[_year_total(y) for y in o.totals_by_year],
            yearly_variations=[VariationPointModel.of(v) for v in o.yearly_variations],
            average_variation_pct=o.average_variation_pct,
        )


class ForecastRecordModel(NpModel):

    transport_type: str
    prediction_year: int
    predicted_passengers: float = Field(ge=0.0)
    confidence_level: float = Field(ge=0.0, le=1.0)

    @classmethod
    def of(cls, r: ForecastRecord) -> ForecastRecordModel:
        return cls(**r.to_dict())


class PredictionSummaryModel(NpModel):

    transport_type: str
    average_confidence: float = Field(ge=0.0, le=1.0)
    final_year: int
    final_prediction: float
    horizon: int

    @classmethod
    def of(cls, s: PredictionSummary) -> PredictionSummaryModel:
        return cls(
            transport_type=s.transport_type,
            average_confidence=s.average_confidence,
            final_year=s.final_year,
            final_prediction=s.final_prediction,
            horizon=s.horizon,
        )


class TimelineRowModel(NpModel):

    year: int
    kind: SeriesKind
    values: Dict[str, float]

    @classmethod
    def of(cls, row: TimelineRow) -> TimelineRowModel:
        return cls(year=row.year, kind=row.kind, values=dict(row.values))


class CompanyAnalysisResponse(NpModel):

    transport_type: str
    analysis_data: Dict[str, Any]
    updated_at: str
