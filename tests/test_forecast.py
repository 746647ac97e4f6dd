"""
Test cases for forecast logic: least squares fitting, R-squared with the
zero-variance policy, non-negative projection, and per-type failure isolation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import numpy as np
import pytest

from config import settings
from engine.enums import Trend
from engine.exceptions import DegenerateFitError, InsufficientDataError
from engine.forecast import fit, forecast_all, project
from engine.forecast.regression import _linear_fit, _r_squared
from engine.records import PassengerRecord


def test_ols_perfect_line():
    points = [(x, 2.0 * x + 3.0) for x in range(1, 11)]
    linear = fit("line", points)
    assert linear.slope == pytest.approx(2.0)
    assert linear.intercept == pytest.approx(3.0)
    assert linear.r_squared == pytest.approx(1.0)
    assert linear.n == 10
    result = project("line", points)
    assert all(r.confidence_level == pytest.approx(1.0) for r in result.records)


def test_ols_matches_numpy_polyfit():
    years = list(range(1995, 2021))
    rng = np.random.default_rng(7)
    vals = [1000.0 - 12.5 * i + float(rng.normal(0, 30)) for i in range(len(years))]
    linear = fit("noisy", list(zip(years, vals)))
    slope, intercept = np.polyfit(np.array(years, dtype=float), np.array(vals), 1)
    assert linear.slope == pytest.approx(slope, rel=1e-6)
    assert linear.intercept == pytest.approx(intercept, rel=1e-6)
    assert 0.0 < linear.r_squared < 1.0


def test_r_squared_zero_variance_policy():
    xs = np.array([1.0, 2.0, 3.0])
    flat = np.array([4.0, 4.0, 4.0])
    assert _r_squared(xs, flat, 0.0, 4.0) == 1.0
    assert _r_squared(xs, flat, 1.0, 0.0) == 0.0


def test_flat_series_full_confidence_and_flat_forecast():
    result = project("flat", [(2000, 5.0), (2001, 5.0), (2002, 5.0)])
    assert result.fit.trend == Trend.decreasing
    assert [r.predicted_passengers for r in result.records] == pytest.approx([5.0] * 5)
    assert all(r.confidence_level == 1.0 for r in result.records)
    assert not any(math.isnan(r.confidence_level) for r in result.records)


def test_forecast_non_negativity():
    points = list(zip(range(1, 6), [100.0, 80.0, 60.0, 40.0, 20.0]))
    result = project("falling", points)
    assert [r.prediction_year for r in result.records] == [6, 7, 8, 9, 10]
    assert all(r.predicted_passengers == 0.0 for r in result.records)


def test_horizon_starts_after_last_observed_year():
    points = [(2018, 10.0), (2020, 30.0), (2019, 20.0)]
    result = project("up", points)
    assert [r.prediction_year for r in result.records] == [2021, 2022, 2023, 2024, 2025]
    assert result.records[0].predicted_passengers == pytest.approx(40.0)


def test_horizon_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "forecast_horizon_years", 3)
    result = project("up", [(1, 1.0), (2, 2.0)])
    assert len(result.records) == 3


def test_confidence_clamped_into_unit_interval():
    # a poor fit still yields a confidence within [0, 1]
    result = project("zigzag", [(1, 10.0), (2, 0.0), (3, 10.0), (4, 0.0)])
    assert all(0.0 <= r.confidence_level <= 1.0 for r in result.records)


def test_insufficient_data():
    with pytest.raises(InsufficientDataError) as excinfo:
        fit("solo", [(2020, 5.0)])
    assert excinfo.value.transport_type == "solo"
    assert excinfo.value.points == 1


def test_identical_x_is_degenerate():
    with pytest.raises(DegenerateFitError):
        _linear_fit(np.array([3.0, 3.0]), np.array([1.0, 2.0]))


def test_per_type_failure_isolation():
    records = [PassengerRecord(1995 + i, "bus", 100.0 + i) for i in range(26)]
    records.append(PassengerRecord(2020, "airship", 3.0))
    batch = forecast_all(records)
    assert batch.types_forecast == 1
    assert batch.types_failed == ["airship"]
    assert "airship" in batch.failures
    assert len(batch.records) == 5
    assert {r.transport_type for r in batch.records} == {"bus"}
    assert [r.prediction_year for r in batch.records] == [2021, 2022, 2023, 2024, 2025]


def test_forecast_all_unique_keys():
    records = [PassengerRecord(y, t, float(y - 1990)) for y in range(1995, 2000) for t in ("a", "b", "c")]
    batch = forecast_all(records)
    keys = [r.key for r in batch.records]
    assert len(keys) == len(set(keys)) == 15
