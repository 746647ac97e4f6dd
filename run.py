#!/usr/bin/env python3

"""
Smoke test runner for a live Passenger Trends Engine API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx

BASE_URL = os.getenv("PASSTREND_BASE_URL", "http://localhost:4322/api/v1")
DATASET = "smoke"
HEADERS = {"Content-Type": "application/json"}

SMALL_TABLE = "year;bus;ferry\n2018;100;5\n2019;110;4\n2020;90;3\n"
SHORT_TABLE = "year;bus;ferry\n2020;90;3\n"
RAGGED_TABLE = "year;bus;ferry\n2019;110\n"
TEXT_TABLE = "year;bus;ferry\n2019;110;many\n"


@dataclass(frozen=True)
class Case:
    label: str
    method: str
    path: str
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    expect: int = 200
    section: str = ""


CASES: list[Case] = [
    # ── Health ────────────────────────────────────────────
    Case("store backend", "GET", "/health", section="Health"),

    # ── Ingest ────────────────────────────────────────────
    Case("bundled source", "POST", "/ingest", section="Ingest", body={}),
    Case("bundled source again", "POST", "/ingest", section="Ingest", body={}),
    Case("inline table", "POST", "/ingest", section="Ingest",
         body={"source_text": SMALL_TABLE, "dataset": DATASET}),
    Case("ragged row", "POST", "/ingest", section="Ingest",
         body={"source_text": RAGGED_TABLE, "dataset": DATASET}, expect=422),
    Case("non-numeric value", "POST", "/ingest", section="Ingest",
         body={"source_text": TEXT_TABLE, "dataset": DATASET}, expect=422),

    # ── Forecast ──────────────────────────────────────────
    Case("bundled dataset", "POST", "/forecast", section="Forecast", body={}),
    Case("inline dataset", "POST", "/forecast", section="Forecast", body={"dataset": DATASET}),
    Case("pipeline single year", "POST", "/pipeline", section="Forecast",
         body={"source_text": SHORT_TABLE, "dataset": "smoke-short"}),

    # ── Statistics ────────────────────────────────────────
    Case("overview", "GET", "/stats/overview", section="Statistics"),
    Case("railway", "GET", "/stats/railway", section="Statistics"),
    Case("inline bus", "GET", "/stats/bus", section="Statistics", params={"dataset": DATASET}),
    Case("unknown type", "GET", "/stats/hovercraft", section="Statistics", expect=404),

    # ── Predictions ───────────────────────────────────────
    Case("all", "GET", "/predictions", section="Predictions"),
    Case("filtered", "GET", "/predictions", section="Predictions", params={"transport_type": "air"}),
    Case("summary", "GET", "/predictions/summary", section="Predictions"),
    Case("timeline", "GET", "/predictions/timeline", section="Predictions"),

    # ── Validation ────────────────────────────────────────
    Case("bad dataset name", "GET", "/stats/overview", section="Validation",
         params={"dataset": "../etc"}, expect=400),
    Case("empty source text", "POST", "/ingest", section="Validation",
         body={"source_text": ""}, expect=422),
]


async def run_case(client: httpx.AsyncClient, case: Case) -> tuple[bool, str, Any]:
    attempt = 0
    last_exc: Exception | None = None
    while attempt < 2:
        try:
            if case.method == "GET":
                r = await client.get(case.path, params=case.params)
            else:
                r = await client.request(case.method, case.path, json=case.body, params=case.params)
            ok = r.status_code == case.expect
            body: Any = None
            try:
                body = r.json()
            except Exception:
                body = r.text
            if ok:
                return True, "", body
            detail = f"{r.status_code} {r.reason_phrase}: {body}"
            return False, detail, body
        except httpx.TransportError as exc:
            last_exc = exc
            attempt += 1
            if attempt < 2:
                await asyncio.sleep(0.1)
                continue
            return False, f"transport error: {exc}", None
        except Exception as e:
            return False, str(e), None
    return False, str(last_exc), None


async def main():
    import json
    import argparse

    parser = argparse.ArgumentParser(description="Run API test cases")
    parser.add_argument("--section", help="only run cases from this section name")
    parser.add_argument("--label", help="only run the case with this exact label")
    args = parser.parse_args()
    selected: list[Case] = []
    for c in CASES:
        if args.section and c.section != args.section:
            continue
        if args.label and c.label != args.label:
            continue
        selected.append(c)
    if not selected:
        print("no matching cases (check --section or --label)")
        sys.exit(1)

    passed = failed = 0
    current_section = ""

    async with httpx.AsyncClient(base_url=BASE_URL, headers=HEADERS, timeout=30) as client:
        for case in selected:
            if case.section != current_section:
                current_section = case.section
                print(f"\n── {current_section} {'─' * max(0, 44 - len(current_section))}")

            ok, detail, body = await run_case(client, case)
            if body is not None:
                try:
                    pretty = json.dumps(body, indent=2)
                except Exception:
                    pretty = str(body)
            else:
                pretty = "<no response>"

            if ok:
                passed += 1
                print(f"  ✓ PASS  {case.method} {case.path} — {case.label}")
                print(f"         response:\n{pretty}")
            else:
                failed += 1
                print(f"  ✗ FAIL  {case.method} {case.path} — {case.label} (expected {case.expect})")
                if detail:
                    print(f"         {detail}")
                print(f"         response:\n{pretty}")

    total = passed + failed
    print(f"\n{'━' * 43}")
    print(f"  Results: {passed} passed / {failed} failed / {total} total")
    print(f"  {'All tests passed ✓' if failed == 0 else f'{failed} test(s) failed ✗'}")
    print(f"{'━' * 43}\n")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
