"""
Company research collaborator: asks an OpenAI-compatible chat completions
endpoint about the leading operators for a transport type and stores the
answer verbatim per type. No numeric contract with the forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from config import settings
from engine.exceptions import ResearchError
from store import company

log = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_SYSTEM_PROMPT = (
    "You are an analyst specialised in transport companies. "
    "Provide detailed analyses and real data about companies in the sector."
)


def build_messages(transport_type: str) -> List[Dict[str, str]]:
    count = settings.research_company_count
    region = settings.research_region
    return [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f"Research and provide information about the {count} main {transport_type} companies "
                f"in {region} or the surrounding region. For each company include:\n"
                "1. Company name\n"
                "2. Year founded\n"
                "3. Fleet size or capacity\n"
                "4. Approximate revenue (if available)\n"
                "5. Approximate market share\n"
                "6. Main routes or service areas\n"
                "7. Current situation of the company\n\n"
                "Provide real, up-to-date data. Return structured JSON."
            ),
        },
    ]


def extract_analysis(text: str) -> Dict[str, Any]:
    """First ``{...}`` span of the answer parsed as JSON, or the raw text wrapped
    as ``{"raw_analysis": text, "companies": []}``."""
    match = _JSON_OBJECT.search(text or "")
    if match:
        try:
            parsed = json.loads(match.group(0))
            if isinstance(parsed, dict):
                return parsed
        except ValueError as exc:
            log.debug("Research answer is not valid JSON: %s", exc)
    return {"raw_analysis": text or "", "companies": []}


class ResearchService:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def _ask(self, transport_type: str) -> str:
        if not settings.research_api_key:
            raise ResearchError("research API key is not configured")
        body = {
            "model": settings.research_model,
            "messages": build_messages(transport_type),
            "temperature": settings.research_temperature,
            "max_tokens": settings.research_max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {settings.research_api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=settings.research_timeout) as client:
                resp = await client.post(settings.research_api_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise ResearchError(f"research API unreachable: {exc}") from exc
        if resp.status_code >= 400:
            log.error("Research API error %d: %s", resp.status_code, resp.text[:200])
            raise ResearchError(f"research API error: {resp.status_code}")
        try:
            choices = resp.json().get("choices") or []
            return str(((choices[0] if choices else {}).get("message") or {}).get("content") or "")
        except (ValueError, AttributeError) as exc:
            raise ResearchError(f"unexpected research API response: {exc}") from exc

    async def research(self, transport_type: str, dataset: Optional[str] = None) -> Dict[str, Any]:
        dataset = dataset or settings.default_dataset
        log.info("Analyzing companies for transport type: %s", transport_type)
        answer = await self._ask(transport_type)
        log.debug("Research answer received: %s", answer[:200])
        return await company.save(dataset, transport_type, extract_analysis(answer))

    async def get(self, transport_type: str, dataset: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return await company.load(dataset or settings.default_dataset, transport_type)


research_service = ResearchService()
