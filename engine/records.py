"""
Passenger and forecast record types shared by the ingest, statistics and
forecast stages, plus their plain-dict wire shape used by the stores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class PassengerRecord:
    year: int
    transport_type: str
    passengers: float

    @property
    def key(self) -> Tuple[int, str]:
        return (self.year, self.transport_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "transport_type": self.transport_type,
            "passengers": self.passengers,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> PassengerRecord:
        return cls(
            year=int(d["year"]),
            transport_type=str(d["transport_type"]),
            passengers=float(d["passengers"]),
        )


@dataclass(frozen=True)
class ForecastRecord:
    transport_type: str
    prediction_year: int
    predicted_passengers: float
    confidence_level: float

    @property
    def key(self) -> Tuple[str, int]:
        return (self.transport_type, self.prediction_year)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transport_type": self.transport_type,
            "prediction_year": self.prediction_year,
            "predicted_passengers": self.predicted_passengers,
            "confidence_level": self.confidence_level,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ForecastRecord:
        return cls(
            transport_type=str(d["transport_type"]),
            prediction_year=int(d["prediction_year"]),
            predicted_passengers=float(d["predicted_passengers"]),
            confidence_level=float(d["confidence_level"]),
        )


def group_by_type(records: Iterable[PassengerRecord]) -> Dict[str, List[Tuple[int, float]]]:
    """Year-ordered ``(year, passengers)`` series per transport type, types in
    first-seen order."""
    grouped: Dict[str, List[Tuple[int, float]]] = {}
    for r in records:
        grouped.setdefault(r.transport_type, []).append((r.year, r.passengers))
    return {t: sorted(points) for t, points in grouped.items()}
