"""
Read-side views over stored forecasts: per-type summary and a merged
historical-plus-forecast timeline for display consumers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Dict, Iterable, List, Tuple

import numpy as np

from engine.enums import SeriesKind
from engine.records import ForecastRecord, PassengerRecord


@dataclass(frozen=True)
class PredictionSummary:
    transport_type: str
    average_confidence: float
    final_year: int
    final_prediction: float
    horizon: int


@dataclass(frozen=True)
class TimelineRow:
    year: int
    kind: SeriesKind
    values: Dict[str, float]


def summarize(predictions: Iterable[ForecastRecord]) -> List[PredictionSummary]:
    by_type: Dict[str, List[ForecastRecord]] = {}
    for p in predictions:
        by_type.setdefault(p.transport_type, []).append(p)

    out: List[PredictionSummary] = []
    for transport_type, preds in by_type.items():
        last = max(preds, key=lambda p: p.prediction_year)
        out.append(PredictionSummary(
            transport_type=transport_type,
            average_confidence=float(np.mean([p.confidence_level for p in preds])),
            final_year=last.prediction_year,
            final_prediction=last.predicted_passengers,
            horizon=len(preds),
        ))
    out.sort(key=lambda s: s.final_prediction, reverse=True)
    return out


def timeline(history: Iterable[PassengerRecord], predictions: Iterable[ForecastRecord]) -> List[TimelineRow]:
    """One row per year; observed values keep their type name, forecasts are
    keyed ``<type>_pred``. A year present in both keeps the historical tag."""
    entries: List[Tuple[int, str, str, float]] = [
        (r.year, SeriesKind.historical, r.transport_type, r.passengers) for r in history
    ] + [
        (p.prediction_year, SeriesKind.prediction, f"{p.transport_type}_pred", p.predicted_passengers)
        for p in predictions
    ]

    def _fold(acc: Dict[int, Tuple[str, Dict[str, float]]], entry: Tuple[int, str, str, float]):
        year, kind, name, value = entry
        prev_kind, values = acc.get(year, (kind, {}))
        return {**acc, year: (prev_kind, {**values, name: value})}

    merged = reduce(_fold, entries, {})
    return [TimelineRow(year=y, kind=k, values=v) for y, (k, v) in sorted(merged.items())]
