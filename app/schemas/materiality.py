"""
schemas/materiality.py
----------------------
Materiality topic payloads.

Scores are on a 0-5 scale. materialityIndex and isMaterial may be sent
explicitly; otherwise the service derives them from the scores.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel

Category = Literal["environmental", "social", "governance"]
ConcernLevel = Literal["low", "medium", "high"]
RiskOrOpportunity = Literal["risk", "opportunity", "both"]


class MaterialityTopicBase(CamelModel):
    category: Optional[Category] = None
    subcategory: Optional[str] = None
    is_custom: Optional[bool] = None
    financial_impact_score: Optional[int] = Field(None, ge=0, le=5)
    impact_on_stakeholders: Optional[int] = Field(None, ge=0, le=5)
    stakeholder_concern_level: Optional[ConcernLevel] = None
    materiality_index: Optional[float] = Field(None, ge=0, le=5)
    is_material: Optional[bool] = None
    scoring_justification: Optional[str] = None
    why_material: Optional[str] = None
    impacted_stakeholders: Optional[List[str]] = None
    business_risk_or_opportunity: Optional[RiskOrOpportunity] = None
    linked_standards: Optional[List[str]] = None
    management_response: Optional[str] = None


class MaterialityTopicUpsert(MaterialityTopicBase):
    organization_id: Optional[str] = None
    topic: str = Field(..., min_length=1, max_length=255)

    @field_validator("topic")
    @classmethod
    def strip_topic(cls, v: str) -> str:
        return v.strip()


class MaterialityTopicUpdate(MaterialityTopicBase):
    topic: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator("topic")
    @classmethod
    def strip_topic(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class MaterialityTopicRead(MaterialityTopicBase):
    id: str
    organization_id: str
    topic: str
    is_custom: bool = False
    is_material: bool = False
    created_at: datetime
    updated_at: datetime
