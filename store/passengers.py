"""
Series store: the current set of passenger records per dataset.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List

from db_models import PassengerRow
from engine.exceptions import StorageError
from engine.records import PassengerRecord
from store import keys, snapshot


async def replace_all(dataset: str, records: Iterable[PassengerRecord]) -> int:
    rows = [r.to_dict() for r in records]
    await snapshot.replace(
        keys.passengers(dataset),
        PassengerRow,
        dataset,
        rows,
        natural_key=lambda d: (d["year"], d["transport_type"]),
    )
    return len(rows)


async def read_all(dataset: str) -> List[PassengerRecord]:
    rows = await snapshot.read(
        keys.passengers(dataset),
        PassengerRow,
        dataset,
        sort_key=lambda d: (d["transport_type"], d["year"]),
    )
    try:
        return [PassengerRecord.from_dict(d) for d in rows]
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageError(f"malformed passenger record: {exc}", dataset=dataset) from exc
