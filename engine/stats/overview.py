"""
Cross-type aggregates over the whole passenger dataset: per-type totals for
most/least used ranking, per-year totals for the peak year, and the
year-over-year variation of yearly totals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from engine.records import PassengerRecord
from engine.stats.variation import VariationPoint, average_variation, year_over_year

K = TypeVar("K")


@dataclass(frozen=True)
class DatasetOverview:
    record_count: int
    transport_types: Tuple[str, ...]
    first_year: Optional[int]
    last_year: Optional[int]
    # descending by total; ties keep first-seen type order
    totals_by_type: Tuple[Tuple[str, float], ...]
    totals_by_year: Tuple[Tuple[int, float], ...]
    yearly_variations: Tuple[VariationPoint, ...]
    average_variation_pct: Optional[float]

    @property
    def most_used(self) -> Optional[Tuple[str, float]]:
        return self.totals_by_type[0] if self.totals_by_type else None

    @property
    def least_used(self) -> Optional[Tuple[str, float]]:
        return self.totals_by_type[-1] if self.totals_by_type else None

    @property
    def peak_year(self) -> Optional[Tuple[int, float]]:
        if not self.totals_by_year:
            return None
        # earliest year wins a tie
        return max(self.totals_by_year, key=lambda item: (item[1], -item[0]))


def totals_by(records: Sequence[PassengerRecord], key: Callable[[PassengerRecord], K]) -> Mapping[K, float]:
    folded = reduce(
        lambda acc, r: {**acc, key(r): acc.get(key(r), 0.0) + r.passengers},
        records,
        {},
    )
    return MappingProxyType(folded)


def overview(records: Iterable[PassengerRecord]) -> DatasetOverview:
    rows = tuple(records)
    by_type = totals_by(rows, lambda r: r.transport_type)
    by_year = totals_by(rows, lambda r: r.year)

    ranked = tuple(sorted(by_type.items(), key=lambda item: item[1], reverse=True))
    yearly = tuple(sorted(by_year.items()))
    variations = year_over_year(yearly)

    return DatasetOverview(
        record_count=len(rows),
        transport_types=tuple(by_type),
        first_year=yearly[0][0] if yearly else None,
        last_year=yearly[-1][0] if yearly else None,
        totals_by_type=ranked,
        totals_by_year=yearly,
        yearly_variations=variations,
        average_variation_pct=average_variation(variations),
    )
