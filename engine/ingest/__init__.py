"""
Ingest stage: reshape wide passenger tables into long-format records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.ingest.parser import WideTable, parse_wide_table

__all__ = ["WideTable", "parse_wide_table"]
