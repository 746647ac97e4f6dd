"""
Replace-all and read-all over one logical record set, dispatched to the
relational backend when a database is configured and to Redis otherwise.
Writers to the same set are serialised.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Hashable, List, Sequence, Type

from config import settings
from database import is_initialized
from db_models import Base
from engine.exceptions import StorageError
from store import sql
from store.client import redis_lrange, redis_replace_list, writer_lock

log = logging.getLogger(__name__)


def use_sql() -> bool:
    return bool(settings.database_url) and is_initialized()


def _check_unique(rows: Sequence[Dict[str, Any]], natural_key: Callable[[Dict[str, Any]], Hashable], dataset: str) -> None:
    seen = set()
    for row in rows:
        k = natural_key(row)
        if k in seen:
            raise StorageError(f"duplicate natural key {k!r} in batch", dataset=dataset)
        seen.add(k)


async def replace(
    key: str,
    model: Type[Base],
    dataset: str,
    rows: Sequence[Dict[str, Any]],
    natural_key: Callable[[Dict[str, Any]], Hashable],
) -> None:
    _check_unique(rows, natural_key, dataset)
    chunk_size = settings.store_chunk_size
    async with writer_lock(key):
        if use_sql():
            await asyncio.to_thread(sql.replace_rows, model, dataset, list(rows), chunk_size)
        else:
            payload = [json.dumps(row, sort_keys=True) for row in rows]
            try:
                await redis_replace_list(key, payload, chunk_size=chunk_size)
            except StorageError as exc:
                raise StorageError(str(exc), dataset=dataset) from exc
    log.info("Stored %d rows under %s", len(rows), key)


async def read(key: str, model: Type[Base], dataset: str, sort_key: Callable[[Dict[str, Any]], Any]) -> List[Dict[str, Any]]:
    if use_sql():
        return await asyncio.to_thread(sql.read_rows, model, dataset)
    try:
        raw = await redis_lrange(key)
    except StorageError as exc:
        raise StorageError(str(exc), dataset=dataset) from exc
    try:
        rows = [json.loads(item) for item in raw]
    except (TypeError, ValueError) as exc:
        raise StorageError(f"corrupt entry under {key}: {exc}", dataset=dataset) from exc
    return sorted(rows, key=sort_key)
