"""
Error taxonomy for ingest, statistics, forecasting and storage.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional


class PassengerDataError(Exception):
    pass


class ParseError(PassengerDataError):
    """Malformed source table. ``row`` is the 0-based line index in the source
    (the header is row 0); ``column`` is the 0-based field index when known."""

    def __init__(self, message: str, row: int, column: Optional[int] = None, field: Optional[str] = None):
        self.row = row
        self.column = column
        self.field = field
        location = f"row {row}"
        if column is not None:
            location += f", column {column}"
            if field:
                location += f" ({field})"
        super().__init__(f"{location}: {message}")


class InsufficientDataError(PassengerDataError):
    def __init__(self, transport_type: str, points: int):
        self.transport_type = transport_type
        self.points = points
        super().__init__(
            f"transport type '{transport_type}' has {points} distinct year(s); at least 2 are required"
        )


class DegenerateFitError(PassengerDataError):
    pass


class StorageError(PassengerDataError):
    def __init__(self, message: str, dataset: Optional[str] = None):
        self.dataset = dataset
        super().__init__(message if dataset is None else f"[{dataset}] {message}")


class UnknownTransportType(PassengerDataError):
    def __init__(self, transport_type: str):
        self.transport_type = transport_type
        super().__init__(f"no records for transport type '{transport_type}'")


class ResearchError(PassengerDataError):
    pass
