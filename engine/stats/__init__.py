"""
Descriptive statistics over passenger records: per-type aggregates,
dataset-wide overview, and year-over-year variation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.stats.variation import VariationPoint, average_variation, year_over_year
from engine.stats.series import SeriesStats, series_stats, stats_for
from engine.stats.overview import DatasetOverview, overview, totals_by

__all__ = [
    "VariationPoint", "average_variation", "year_over_year",
    "SeriesStats", "series_stats", "stats_for",
    "DatasetOverview", "overview", "totals_by",
]
