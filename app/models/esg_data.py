"""
models/esg_data.py
------------------
ESG data KPI catalog. One row per KPI measurement, classified by ESG
section and ESRS topic.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid


class EsgDataKpi(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "esg_data_kpis"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    kpi_name: Mapped[str] = mapped_column(String(255), nullable=False)
    esg_section: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    esrs_topic: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # E1, S1, G1, ...
    topic_title: Mapped[str] = mapped_column(String(255), nullable=False)

    metric_type: Mapped[str] = mapped_column(String(20), nullable=False)
    unit_of_measure: Mapped[str] = mapped_column(String(100), nullable=False)
    reference_standard: Mapped[Optional[list]] = mapped_column(JSON)
    baseline_year: Mapped[Optional[int]] = mapped_column(Integer)

    data_owner: Mapped[str] = mapped_column(String(255), nullable=False)
    source_type: Mapped[Optional[list]] = mapped_column(JSON)
    collection_frequency: Mapped[str] = mapped_column(String(100), nullable=False)
    collection_method: Mapped[str] = mapped_column(String(255), nullable=False)

    assurance_level: Mapped[str] = mapped_column(String(100), nullable=False)
    verification_status: Mapped[str] = mapped_column(String(100), nullable=False)
    confidentiality_level: Mapped[str] = mapped_column(String(100), nullable=False)

    # Stored as text to hold numeric and qualitative values alike
    current_value: Mapped[Optional[str]] = mapped_column(Text)
    reporting_period: Mapped[Optional[str]] = mapped_column(String(100))
    last_updated: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    supporting_files: Mapped[Optional[list]] = mapped_column(JSON)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    completion_status: Mapped[str] = mapped_column(String(20), default="missing")

    def __repr__(self) -> str:
        return f"<EsgDataKpi id={self.id} topic={self.esrs_topic} name={self.kpi_name}>"
