"""
Constants and configuration for Passenger Trends Engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


PROJECT_ROOT = Path(__file__).resolve().parent

REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

PASSTREND_DATABASE_URL = os.getenv("PASSTREND_DATABASE_URL", "")
PASSTREND_DEFAULT_DATASET = os.getenv("PASSTREND_DEFAULT_DATASET", "ua_passengers")
PASSTREND_SOURCE_PATH = os.getenv(
    "PASSTREND_SOURCE_PATH",
    str(PROJECT_ROOT / "data" / "ua_passengers_1995-2020.csv"),
)

PASSTREND_RESEARCH_API_URL = os.getenv(
    "PASSTREND_RESEARCH_API_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
).rstrip("/")
PASSTREND_RESEARCH_API_KEY = os.getenv("PASSTREND_RESEARCH_API_KEY", "")
PASSTREND_RESEARCH_MODEL = os.getenv("PASSTREND_RESEARCH_MODEL", "google/gemini-2.5-flash")

# column header that must open every wide-format source table
YEAR_COLUMN = "year"

HEALTH_PATH = "/health"


class Settings(BaseSettings):
    database_url: Optional[str] = PASSTREND_DATABASE_URL or None
    default_dataset: str = PASSTREND_DEFAULT_DATASET

    # ingest source
    source_path: str = PASSTREND_SOURCE_PATH
    source_delimiter: str = ";"

    # forecasting
    forecast_horizon_years: int = 5
    forecast_min_points: int = 2

    # descriptive statistics
    variation_decimals: int = 2

    # store behaviour
    store_chunk_size: int = 100
    store_redis_retry_cooldown_seconds: float = 10.0
    store_redis_op_timeout_seconds: float = 0.5
    store_fallback_max_items: int = 10_000

    # company research collaborator
    research_api_url: str = PASSTREND_RESEARCH_API_URL
    research_api_key: str = PASSTREND_RESEARCH_API_KEY
    research_model: str = PASSTREND_RESEARCH_MODEL
    research_timeout: float = 60.0
    research_temperature: float = 0.7
    research_max_tokens: int = 2000
    research_company_count: int = 3
    research_region: str = "Ukraine"

    api_host: str = "0.0.0.0"
    api_port: int = 4322

    model_config = {
        "env_prefix": "PASSTREND_",
        "extra": "ignore",
    }


settings = Settings()
