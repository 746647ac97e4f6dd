"""
Ordinary least squares fit of passengers against calendar year, with a
coefficient of determination that never comes out as NaN.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from config import settings
from engine.enums import Trend
from engine.exceptions import DegenerateFitError, InsufficientDataError


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    r_squared: float
    n: int

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    @property
    def trend(self) -> Trend:
        return Trend.from_slope(self.slope)


def _linear_fit(xs: np.ndarray, ys: np.ndarray) -> Tuple[float, float]:
    n = len(xs)
    sum_x = float(np.sum(xs))
    sum_y = float(np.sum(ys))
    sum_xy = float(np.sum(xs * ys))
    sum_x2 = float(np.sum(xs * xs))
    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        raise DegenerateFitError("all x values are identical")
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def _r_squared(xs: np.ndarray, ys: np.ndarray, slope: float, intercept: float) -> float:
    predicted = slope * xs + intercept
    ss_res = float(np.sum((ys - predicted) ** 2))
    ss_tot = float(np.sum((ys - np.mean(ys)) ** 2))
    if ss_tot == 0:
        return 1.0 if ss_res == 0 else 0.0
    return 1.0 - ss_res / ss_tot


def fit(transport_type: str, points: Sequence[Tuple[int, float]]) -> LinearFit:
    """Fit ``passengers = slope * year + intercept`` over one series.

    Raises :class:`InsufficientDataError` when fewer than the configured
    minimum of distinct years are present.
    """
    years: List[int] = [int(x) for x, _ in points]
    distinct = len(set(years))
    if distinct < max(2, settings.forecast_min_points):
        raise InsufficientDataError(transport_type, distinct)

    xs = np.array(years, dtype=float)
    ys = np.array([float(y) for _, y in points], dtype=float)
    try:
        slope, intercept = _linear_fit(xs, ys)
    except DegenerateFitError:
        raise InsufficientDataError(transport_type, distinct) from None

    r2 = _r_squared(xs, ys, slope, intercept)
    if not np.isfinite(r2):
        r2 = 0.0
    return LinearFit(slope=slope, intercept=intercept, r_squared=r2, n=len(xs))
