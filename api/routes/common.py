"""
Shared helpers for API route modules.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from typing import Any, Optional

from fastapi import HTTPException

from config import settings

_DATASET_RE = re.compile(r"[A-Za-z0-9_.-]{1,128}")


def resolve_dataset(dataset: Optional[str]) -> str:
    resolved = (dataset or settings.default_dataset).strip()
    if not _DATASET_RE.fullmatch(resolved):
        raise HTTPException(status_code=400, detail=f"Invalid dataset name {resolved!r}")
    return resolved


def query_value(value: Any) -> Any:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    return value.default if hasattr(value, "default") else value
