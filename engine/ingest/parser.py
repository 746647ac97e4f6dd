"""
Wide-to-long reshaping of delimiter-separated passenger tables: one row per
year and one column per transport type become one record per (year, type).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import YEAR_COLUMN, settings
from engine.exceptions import ParseError
from engine.records import PassengerRecord


@dataclass(frozen=True)
class WideTable:
    transport_types: Tuple[str, ...]
    records: Tuple[PassengerRecord, ...]
    row_count: int


def _split(line: str, delimiter: str) -> List[str]:
    return [field.strip() for field in line.split(delimiter)]


def _parse_header(line: str, delimiter: str, row: int = 0) -> Tuple[str, ...]:
    fields = _split(line, delimiter)
    if not fields or fields[0].lower() != YEAR_COLUMN:
        raise ParseError(f"header must start with '{YEAR_COLUMN}'", row=row, column=0)
    types = fields[1:]
    if not types:
        raise ParseError("header declares no transport type columns", row=row)
    seen: set[str] = set()
    for col, name in enumerate(types, start=1):
        if not name:
            raise ParseError("empty transport type name", row=row, column=col)
        if name in seen:
            raise ParseError(f"duplicate transport type '{name}'", row=row, column=col, field=name)
        seen.add(name)
    return tuple(types)


def _parse_year(raw: str, row: int) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ParseError(f"year {raw!r} is not an integer", row=row, column=0, field=YEAR_COLUMN) from None


def _parse_count(raw: str, row: int, column: int, field: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ParseError(f"value {raw!r} is not numeric", row=row, column=column, field=field) from None
    if not math.isfinite(value):
        raise ParseError(f"value {raw!r} is not finite", row=row, column=column, field=field)
    if value < 0:
        raise ParseError(f"passenger count {raw!r} is negative", row=row, column=column, field=field)
    return value


def parse_wide_table(text: str, delimiter: Optional[str] = None) -> WideTable:
    """Parse ``year;<type_1>;...;<type_k>`` tables.

    A table of R data rows and k type columns yields exactly R*k records in
    row-major order. Blank lines are skipped; row indices in errors refer to
    the physical line, blank lines included.
    """
    if delimiter is None:
        delimiter = settings.source_delimiter

    lines = [(i, line) for i, line in enumerate(text.splitlines()) if line.strip()]
    if not lines:
        raise ParseError("source is empty", row=0)

    header_row, header = lines[0]
    types = _parse_header(header, delimiter, header_row)
    width = len(types) + 1

    records: List[PassengerRecord] = []
    years: set[int] = set()
    for row, line in lines[1:]:
        fields = _split(line, delimiter)
        if len(fields) != width:
            raise ParseError(f"expected {width} columns, found {len(fields)}", row=row)
        year = _parse_year(fields[0], row)
        if year in years:
            raise ParseError(f"duplicate year {year}", row=row, column=0, field=YEAR_COLUMN)
        years.add(year)
        for col, (transport_type, raw) in enumerate(zip(types, fields[1:]), start=1):
            records.append(PassengerRecord(
                year=year,
                transport_type=transport_type,
                passengers=_parse_count(raw, row, col, transport_type),
            ))

    return WideTable(transport_types=types, records=tuple(records), row_count=len(years))
