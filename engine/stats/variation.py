"""
Year-over-year percentage variation with an explicit marker for points whose
previous value is zero.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import settings


@dataclass(frozen=True)
class VariationPoint:
    year: int
    variation_pct: Optional[float]

    @property
    def no_baseline(self) -> bool:
        return self.variation_pct is None


def year_over_year(points: Sequence[Tuple[int, float]], decimals: Optional[int] = None) -> Tuple[VariationPoint, ...]:
    """``(v[i] - v[i-1]) / v[i-1] * 100`` for i = 1..n-1 over year-ordered points."""
    if decimals is None:
        decimals = settings.variation_decimals
    ordered = sorted(points)
    out: List[VariationPoint] = []
    for (_, prev), (year, curr) in zip(ordered, ordered[1:]):
        if prev == 0:
            out.append(VariationPoint(year=year, variation_pct=None))
            continue
        out.append(VariationPoint(year=year, variation_pct=round((curr - prev) / prev * 100, decimals)))
    return tuple(out)


def average_variation(variations: Sequence[VariationPoint], decimals: Optional[int] = None) -> Optional[float]:
    if decimals is None:
        decimals = settings.variation_decimals
    defined = [v.variation_pct for v in variations if v.variation_pct is not None]
    if not defined:
        return None
    return round(float(np.mean(defined)), decimals)
