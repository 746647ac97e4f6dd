"""
Relational backend for the record stores. A replace deletes the dataset's
rows and inserts the new batch in chunks inside one transaction, so other
sessions observe either the previous snapshot or the new one.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Type

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from database import get_db_session
from db_models import Base, CompanyAnalysisRow, ForecastRow, PassengerRow
from engine.exceptions import StorageError

log = logging.getLogger(__name__)

_ORDERING: Dict[Type[Base], tuple] = {
    PassengerRow: (PassengerRow.transport_type, PassengerRow.year),
    ForecastRow: (ForecastRow.transport_type, ForecastRow.prediction_year),
}

_COLUMNS: Dict[Type[Base], tuple[str, ...]] = {
    PassengerRow: ("year", "transport_type", "passengers"),
    ForecastRow: ("transport_type", "prediction_year", "predicted_passengers", "confidence_level"),
}


def replace_rows(model: Type[Base], dataset: str, rows: Sequence[Dict[str, Any]], chunk_size: int = 100) -> None:
    chunk_size = max(1, int(chunk_size))
    try:
        with get_db_session() as db:
            db.execute(delete(model).where(model.dataset == dataset))
            for start in range(0, len(rows), chunk_size):
                chunk = [{**row, "dataset": dataset} for row in rows[start:start + chunk_size]]
                db.execute(insert(model), chunk)
    except (SQLAlchemyError, RuntimeError) as exc:
        raise StorageError(f"replace of {model.__tablename__} failed: {exc}", dataset=dataset) from exc
    log.debug("Replaced %s for %s with %d rows", model.__tablename__, dataset, len(rows))


def read_rows(model: Type[Base], dataset: str) -> List[Dict[str, Any]]:
    columns = _COLUMNS[model]
    try:
        with get_db_session() as db:
            result = db.scalars(
                select(model).where(model.dataset == dataset).order_by(*_ORDERING[model])
            ).all()
            return [{c: getattr(row, c) for c in columns} for row in result]
    except (SQLAlchemyError, RuntimeError) as exc:
        raise StorageError(f"read of {model.__tablename__} failed: {exc}", dataset=dataset) from exc


def upsert_company(dataset: str, transport_type: str, analysis: Dict[str, Any], updated_at: datetime) -> None:
    try:
        with get_db_session() as db:
            row = db.scalars(
                select(CompanyAnalysisRow).where(
                    CompanyAnalysisRow.dataset == dataset,
                    CompanyAnalysisRow.transport_type == transport_type,
                )
            ).first()
            if row is None:
                db.add(CompanyAnalysisRow(
                    dataset=dataset,
                    transport_type=transport_type,
                    analysis_data=analysis,
                    updated_at=updated_at,
                ))
            else:
                row.analysis_data = analysis
                row.updated_at = updated_at
    except (SQLAlchemyError, RuntimeError) as exc:
        raise StorageError(f"company analysis save failed: {exc}", dataset=dataset) from exc


def load_company(dataset: str, transport_type: str) -> Optional[Dict[str, Any]]:
    try:
        with get_db_session() as db:
            row = db.scalars(
                select(CompanyAnalysisRow).where(
                    CompanyAnalysisRow.dataset == dataset,
                    CompanyAnalysisRow.transport_type == transport_type,
                )
            ).first()
            if row is None:
                return None
            return {
                "transport_type": row.transport_type,
                "analysis_data": row.analysis_data,
                "updated_at": row.updated_at.isoformat(),
            }
    except (SQLAlchemyError, RuntimeError) as exc:
        raise StorageError(f"company analysis load failed: {exc}", dataset=dataset) from exc
