"""
Five-year-ahead projection per transport type from its linear fit, with
forecasts clamped to non-negative counts and confidence clamped into [0, 1].
Each type is projected independently so that one short series does not
abort the rest of the batch.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config import settings
from engine.exceptions import InsufficientDataError
from engine.forecast.regression import LinearFit, fit
from engine.records import ForecastRecord, PassengerRecord, group_by_type

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesForecast:
    transport_type: str
    fit: LinearFit
    records: Tuple[ForecastRecord, ...]

    @property
    def confidence(self) -> float:
        return _clamp(self.fit.r_squared, 0.0, 1.0)


@dataclass(frozen=True)
class ForecastBatch:
    forecasts: Tuple[SeriesForecast, ...]
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def records(self) -> List[ForecastRecord]:
        return [r for f in self.forecasts for r in f.records]

    @property
    def types_forecast(self) -> int:
        return len(self.forecasts)

    @property
    def types_failed(self) -> List[str]:
        return sorted(self.failures)


def _clamp(value: float, low: float, high: float) -> float:
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def project(
    transport_type: str,
    points: Sequence[Tuple[int, float]],
    horizon: Optional[int] = None,
) -> SeriesForecast:
    if horizon is None:
        horizon = settings.forecast_horizon_years
    linear = fit(transport_type, points)
    confidence = _clamp(linear.r_squared, 0.0, 1.0)
    last_year = max(int(x) for x, _ in points)

    records = []
    for offset in range(1, horizon + 1):
        year = last_year + offset
        predicted = linear.predict(year)
        if not math.isfinite(predicted):
            predicted = 0.0
        records.append(ForecastRecord(
            transport_type=transport_type,
            prediction_year=year,
            predicted_passengers=max(0.0, predicted),
            confidence_level=confidence,
        ))
    return SeriesForecast(transport_type=transport_type, fit=linear, records=tuple(records))


def forecast_all(records: Iterable[PassengerRecord], horizon: Optional[int] = None) -> ForecastBatch:
    forecasts: List[SeriesForecast] = []
    failures: Dict[str, str] = {}
    for transport_type, points in group_by_type(records).items():
        try:
            forecasts.append(project(transport_type, points, horizon=horizon))
        except InsufficientDataError as exc:
            log.warning("Forecast skipped for %s: %s", transport_type, exc)
            failures[transport_type] = str(exc)
    return ForecastBatch(forecasts=tuple(forecasts), failures=failures)
