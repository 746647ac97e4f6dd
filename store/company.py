"""
Company analysis storage and retrieval, one entry per transport type.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from store.client import redis_get, redis_set
from store import keys, sql
from store.snapshot import use_sql

log = logging.getLogger(__name__)


async def load(dataset: str, transport_type: str) -> Optional[Dict[str, Any]]:
    if use_sql():
        return await asyncio.to_thread(sql.load_company, dataset, transport_type)
    try:
        raw = await redis_get(keys.company(dataset, transport_type))
        if raw:
            payload = json.loads(raw)
            if isinstance(payload, dict) and isinstance(payload.get("analysis_data"), dict):
                return payload
    except Exception as exc:
        log.debug("Company analysis load failed %s/%s: %s", dataset, transport_type, exc)
    return None


async def save(dataset: str, transport_type: str, analysis: Dict[str, Any]) -> Dict[str, Any]:
    updated_at = datetime.now(timezone.utc)
    if use_sql():
        await asyncio.to_thread(sql.upsert_company, dataset, transport_type, analysis, updated_at)
    else:
        payload = {
            "transport_type": transport_type,
            "analysis_data": analysis,
            "updated_at": updated_at.isoformat(),
        }
        await redis_set(keys.company(dataset, transport_type), json.dumps(payload))
    return {
        "transport_type": transport_type,
        "analysis_data": analysis,
        "updated_at": updated_at.isoformat(),
    }
