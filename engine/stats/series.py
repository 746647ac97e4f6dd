"""
Descriptive statistics for a single transport type.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from engine.enums import Trend
from engine.exceptions import InsufficientDataError, UnknownTransportType
from engine.forecast.regression import fit
from engine.records import PassengerRecord
from engine.stats.variation import VariationPoint, year_over_year

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesStats:
    transport_type: str
    observations: int
    total: float
    average: float
    max_value: float
    max_year: int
    min_value: float
    min_year: int
    variations: Tuple[VariationPoint, ...]
    # regression-derived; absent when the series is too short to fit
    slope: Optional[float]
    trend: Optional[Trend]


def series_stats(transport_type: str, points: Iterable[Tuple[int, float]]) -> SeriesStats:
    ordered = sorted(points)
    if not ordered:
        raise UnknownTransportType(transport_type)

    years = np.array([y for y, _ in ordered], dtype=int)
    vals = np.array([v for _, v in ordered], dtype=float)
    # argmax/argmin return the first occurrence, i.e. the earliest year on ties
    hi = int(np.argmax(vals))
    lo = int(np.argmin(vals))

    slope: Optional[float] = None
    trend: Optional[Trend] = None
    try:
        linear = fit(transport_type, ordered)
        slope, trend = linear.slope, linear.trend
    except InsufficientDataError as exc:
        log.debug("No trend for %s: %s", transport_type, exc)

    return SeriesStats(
        transport_type=transport_type,
        observations=len(ordered),
        total=float(np.sum(vals)),
        average=float(np.mean(vals)),
        max_value=float(vals[hi]),
        max_year=int(years[hi]),
        min_value=float(vals[lo]),
        min_year=int(years[lo]),
        variations=year_over_year(ordered),
        slope=slope,
        trend=trend,
    )


def stats_for(records: Iterable[PassengerRecord], transport_type: str) -> SeriesStats:
    return series_stats(
        transport_type,
        ((r.year, r.passengers) for r in records if r.transport_type == transport_type),
    )
