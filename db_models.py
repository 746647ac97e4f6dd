"""
Relational tables backing the passenger, forecast and company analysis stores.
"""
from __future__ import annotations

from datetime import datetime
from sqlalchemy import JSON, DateTime, Float, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PassengerRow(Base):
    __tablename__ = "passenger_records"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset: Mapped[str] = mapped_column(String(128), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    transport_type: Mapped[str] = mapped_column(String(64), nullable=False)
    passengers: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        UniqueConstraint("dataset", "year", "transport_type", name="uq_passenger_records_key"),
    )


class ForecastRow(Base):
    __tablename__ = "forecast_records"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset: Mapped[str] = mapped_column(String(128), nullable=False)
    transport_type: Mapped[str] = mapped_column(String(64), nullable=False)
    prediction_year: Mapped[int] = mapped_column(Integer, nullable=False)
    predicted_passengers: Mapped[float] = mapped_column(Float, nullable=False)
    confidence_level: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("dataset", "transport_type", "prediction_year", name="uq_forecast_records_key"),
    )


class CompanyAnalysisRow(Base):
    __tablename__ = "company_analysis"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dataset: Mapped[str] = mapped_column(String(128), nullable=False)
    transport_type: Mapped[str] = mapped_column(String(64), nullable=False)
    company_name: Mapped[str] = mapped_column(String(256), nullable=False, default="Multiple Companies")
    analysis_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("dataset", "transport_type", name="uq_company_analysis_type"),
    )
