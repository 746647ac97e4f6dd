"""
Forecasting logic for passenger series: ordinary least squares fit per
transport type, R²-based confidence scoring, non-negative five-year
projection, and summary views over the resulting forecast set.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.forecast.regression import LinearFit, fit
from engine.forecast.projection import ForecastBatch, SeriesForecast, forecast_all, project
from engine.forecast.summary import PredictionSummary, TimelineRow, summarize, timeline

__all__ = [
    "LinearFit", "fit",
    "ForecastBatch", "SeriesForecast", "forecast_all", "project",
    "PredictionSummary", "TimelineRow", "summarize", "timeline",
]
