"""
schemas/risk.py
---------------
Payloads for due diligence, the IRO register and action plans.
"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel

IroType = Literal["Actual Impact", "Potential Impact", "Risk", "Opportunity"]


# ── Due diligence ─────────────────────────────────────────────────────────────

class DueDiligenceBase(CamelModel):
    frameworks: Optional[List[str]] = None
    scope_description: Optional[str] = None
    governance_oversight: Optional[str] = None
    process_description: Optional[str] = None
    frequency: Optional[str] = None
    stakeholder_involvement: Optional[List[str]] = None
    grievance_mechanism_available: Optional[bool] = None
    grievance_mechanism_description: Optional[str] = None
    supporting_documents: Optional[List[str]] = None


class DueDiligenceUpsert(DueDiligenceBase):
    organization_id: Optional[str] = None


class DueDiligenceRead(DueDiligenceBase):
    id: str
    organization_id: str
    created_at: datetime
    updated_at: datetime


# ── IRO register ──────────────────────────────────────────────────────────────

class IroBase(CamelModel):
    iro_type: Optional[IroType] = None
    category: Optional[str] = None
    iro_description: Optional[str] = None
    likelihood: Optional[int] = Field(None, ge=1, le=5)
    severity_magnitude: Optional[int] = Field(None, ge=1, le=5)
    time_horizon: Optional[str] = None
    affected_stakeholders: Optional[List[str]] = None
    value_chain_location: Optional[str] = None
    financial_materiality: Optional[bool] = None
    impact_materiality: Optional[bool] = None
    linked_strategy_goal: Optional[List[str]] = None


class IroCreate(IroBase):
    organization_id: Optional[str] = None
    iro_title: str = Field(..., min_length=1, max_length=255)


class IroUpdate(IroBase):
    iro_title: Optional[str] = Field(None, min_length=1, max_length=255)


class IroRead(IroBase):
    id: str
    organization_id: str
    iro_title: str
    created_at: datetime
    updated_at: datetime


# ── Action plans ──────────────────────────────────────────────────────────────

class ActionPlanBase(CamelModel):
    iro_id: Optional[str] = None
    response_type: Optional[str] = None
    response_description: Optional[str] = None
    target_outcome: Optional[str] = None
    responsible_department: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget_amount: Optional[float] = Field(None, ge=0)
    budget_currency: Optional[str] = Field(None, min_length=3, max_length=3)


class ActionPlanCreate(ActionPlanBase):
    organization_id: Optional[str] = None


class ActionPlanUpdate(ActionPlanBase):
    pass


class ActionPlanRead(ActionPlanBase):
    id: str
    organization_id: str
    budget_currency: str = "EUR"
    created_at: datetime
    updated_at: datetime
