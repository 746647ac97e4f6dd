from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class IngestRequest(BaseModel):
    # omitted: the bundled source file configured by PASSTREND_SOURCE_PATH
    source_text: Optional[str] = Field(default=None, min_length=1)
    dataset: Optional[str] = Field(default=None, min_length=1, max_length=128)


class ForecastRequest(BaseModel):
    dataset: Optional[str] = Field(default=None, min_length=1, max_length=128)
