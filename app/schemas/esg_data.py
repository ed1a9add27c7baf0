"""
schemas/esg_data.py
-------------------
ESG data KPI payloads.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel

EsgSection = Literal["environment", "social", "governance"]
MetricType = Literal["quantitative", "qualitative", "monetary", "ratio"]
CompletionStatus = Literal["complete", "partial", "missing"]


class EsgDataKpiOptional(CamelModel):
    reference_standard: Optional[List[str]] = None
    baseline_year: Optional[int] = Field(None, ge=1900, le=2100)
    source_type: Optional[List[str]] = None
    current_value: Optional[str] = None
    reporting_period: Optional[str] = None
    last_updated: Optional[datetime] = None
    notes: Optional[str] = None
    supporting_files: Optional[List[str]] = None
    is_active: Optional[bool] = None
    completion_status: Optional[CompletionStatus] = None


class EsgDataKpiCreate(EsgDataKpiOptional):
    organization_id: Optional[str] = None
    kpi_name: str = Field(..., min_length=1, max_length=255)
    esg_section: EsgSection
    esrs_topic: str = Field(..., min_length=1, max_length=20)
    topic_title: str = Field(..., min_length=1, max_length=255)
    metric_type: MetricType
    unit_of_measure: str = Field(..., min_length=1)
    data_owner: str = Field(..., min_length=1)
    collection_frequency: str = Field(..., min_length=1)
    collection_method: str = Field(..., min_length=1)
    assurance_level: str = Field(..., min_length=1)
    verification_status: str = Field(..., min_length=1)
    confidentiality_level: str = Field(..., min_length=1)


class EsgDataKpiUpdate(EsgDataKpiOptional):
    kpi_name: Optional[str] = Field(None, min_length=1, max_length=255)
    esg_section: Optional[EsgSection] = None
    esrs_topic: Optional[str] = Field(None, min_length=1, max_length=20)
    topic_title: Optional[str] = None
    metric_type: Optional[MetricType] = None
    unit_of_measure: Optional[str] = None
    data_owner: Optional[str] = None
    collection_frequency: Optional[str] = None
    collection_method: Optional[str] = None
    assurance_level: Optional[str] = None
    verification_status: Optional[str] = None
    confidentiality_level: Optional[str] = None


class EsgDataKpiRead(EsgDataKpiCreate):
    id: str
    organization_id: str
    is_active: bool = True
    completion_status: CompletionStatus = "missing"
    created_at: datetime
    updated_at: datetime
