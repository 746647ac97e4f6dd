"""
Enumerations for trend labels and timeline series kinds.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class Trend(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"

    @classmethod
    def from_slope(cls, slope: float) -> Trend:
        # a flat series is labelled decreasing
        return cls.increasing if slope > 0 else cls.decreasing


class SeriesKind(str, Enum):
    historical = "historical"
    prediction = "prediction"
