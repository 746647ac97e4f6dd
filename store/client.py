"""
Client code for Redis access, with in-memory fallback if Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
import uuid
from typing import Any, Optional, Sequence

from engine.exceptions import StorageError

log = logging.getLogger(__name__)

_redis_client: Any = None
_fallback: dict[str, str] = {}
_fallback_lists: dict[str, list[str]] = {}
_using_fallback = False
_had_redis = False
_init_lock = asyncio.Lock()
_write_locks: dict[str, asyncio.Lock] = {}
_retry_after_monotonic: float = 0.0

try:
    from config import settings
    _MAX_FALLBACK_SIZE = int(settings.store_fallback_max_items)
    _REDIS_RETRY_COOLDOWN_SECONDS = float(settings.store_redis_retry_cooldown_seconds)
    _REDIS_OP_TIMEOUT_SECONDS = float(settings.store_redis_op_timeout_seconds)
except Exception:
    _MAX_FALLBACK_SIZE = 10_000
    _REDIS_RETRY_COOLDOWN_SECONDS = 10.0
    _REDIS_OP_TIMEOUT_SECONDS = 0.5


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic, _had_redis

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        _using_fallback = True
        return None

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            _using_fallback = True
            return None
        try:
            import redis.asyncio as aioredis
            from config import REDIS_URL

            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=0.5,
                socket_timeout=0.5,
            )
            await asyncio.wait_for(client.ping(), timeout=0.5)
            _redis_client = client
            _had_redis = True
            _retry_after_monotonic = 0.0
            _using_fallback = False
            log.info("Redis connected: %s", REDIS_URL)
            return _redis_client
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(0.0, _REDIS_RETRY_COOLDOWN_SECONDS)
            if not _using_fallback:
                log.warning("Redis unavailable (%s), using in-memory fallback", exc)
                _using_fallback = True
            return None


async def close_redis() -> None:
    global _redis_client
    client, _redis_client = _redis_client, None
    if client is not None:
        with contextlib.suppress(Exception):
            await client.aclose()


def writer_lock(key: str) -> asyncio.Lock:
    """Single-writer lock per logical key within this process."""
    lock = _write_locks.get(key)
    if lock is None:
        lock = _write_locks.setdefault(key, asyncio.Lock())
    return lock


async def redis_get(key: str) -> Optional[str]:
    client = await get_redis()
    if client is None:
        return _fallback.get(key)
    try:
        return await asyncio.wait_for(client.get(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis GET error %s: %s", key, exc)
        return _fallback.get(key)


async def redis_set(key: str, value: str) -> None:
    client = await get_redis()
    if client is None:
        if len(_fallback) < _MAX_FALLBACK_SIZE or key in _fallback:
            _fallback[key] = value
        return
    try:
        await asyncio.wait_for(client.set(key, value), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis SET error %s: %s", key, exc)
        if len(_fallback) < _MAX_FALLBACK_SIZE or key in _fallback:
            _fallback[key] = value


async def _list_client(key: str) -> Any:
    client = await get_redis()
    if client is None and _had_redis:
        # the authoritative list lives in Redis; the local copy may be stale
        raise StorageError(f"Redis unavailable for {key}")
    return client


async def redis_lrange(key: str) -> list[str]:
    """Full contents of the list at ``key``.

    The in-memory list is used only while this process has never reached
    Redis. Once it has, a failed or skipped read raises :class:`StorageError`.
    """
    client = await _list_client(key)
    if client is None:
        return list(_fallback_lists.get(key, []))
    try:
        return await asyncio.wait_for(client.lrange(key, 0, -1), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.warning("Redis LRANGE error %s: %s", key, exc)
        raise StorageError(f"read of {key} failed: {exc}") from exc


async def redis_replace_list(key: str, values: Sequence[str], chunk_size: int = 100) -> None:
    """Replace the list at ``key`` so readers see either the old or the new
    contents, never an empty or partial list.

    Values are pushed to a private staging key in ``chunk_size`` batches and
    then swapped in with RENAME. Any failure removes the staging key, leaves
    ``key`` untouched and raises :class:`StorageError`.
    """
    client = await _list_client(key)
    if client is None:
        if len(values) > _MAX_FALLBACK_SIZE:
            raise StorageError(f"{len(values)} items exceed the in-memory store limit of {_MAX_FALLBACK_SIZE}")
        _fallback_lists[key] = list(values)
        return

    chunk_size = max(1, int(chunk_size))
    staging = f"{key}:staging:{uuid.uuid4().hex}"
    try:
        for start in range(0, len(values), chunk_size):
            chunk = values[start:start + chunk_size]
            await asyncio.wait_for(client.rpush(staging, *chunk), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        if values:
            await asyncio.wait_for(client.rename(staging, key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        else:
            await asyncio.wait_for(client.delete(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        with contextlib.suppress(Exception):
            await asyncio.wait_for(client.delete(staging), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        raise StorageError(f"replace of {key} failed: {exc}") from exc


def is_using_fallback() -> bool:
    return _using_fallback
