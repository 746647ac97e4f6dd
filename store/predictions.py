"""
Prediction store: the current set of forecast records per dataset.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List

from db_models import ForecastRow
from engine.exceptions import StorageError
from engine.records import ForecastRecord
from store import keys, snapshot


async def replace_all(dataset: str, records: Iterable[ForecastRecord]) -> int:
    rows = [r.to_dict() for r in records]
    await snapshot.replace(
        keys.predictions(dataset),
        ForecastRow,
        dataset,
        rows,
        natural_key=lambda d: (d["transport_type"], d["prediction_year"]),
    )
    return len(rows)


async def read_all(dataset: str) -> List[ForecastRecord]:
    rows = await snapshot.read(
        keys.predictions(dataset),
        ForecastRow,
        dataset,
        sort_key=lambda d: (d["transport_type"], d["prediction_year"]),
    )
    try:
        return [ForecastRecord.from_dict(d) for d in rows]
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageError(f"malformed forecast record: {exc}", dataset=dataset) from exc
