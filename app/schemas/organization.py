"""
schemas/organization.py
-----------------------
Pydantic request/response models for organizations and consultant links.

Naming convention:
  OrganizationCreate   → inbound request body
  OrganizationRead     → outbound full record
  OrganizationSummary  → the lightweight record the access resolver returns
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel


class OrganizationCreate(CamelModel):
    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        examples=["Acme Corp"],
        description="Organization display name",
    )
    industry: Optional[str] = None
    business_type: Optional[str] = None
    country: Optional[str] = None
    employee_count: Optional[int] = Field(None, ge=0)
    annual_revenue: Optional[str] = None
    reporting_year: Optional[int] = Field(None, ge=1900, le=2100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class OrganizationSummary(CamelModel):
    id: str
    name: str
    industry: Optional[str] = None
    country: Optional[str] = None
    employee_count: Optional[int] = None
    annual_revenue: Optional[str] = None
    reporting_year: Optional[int] = None


class OrganizationRead(OrganizationSummary):
    business_type: Optional[str] = None
    owner_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ClientOrganizationCreate(OrganizationCreate):
    """A consultant creating an organization on behalf of a client."""
    contact_email: Optional[EmailStr] = None
    contact_person: Optional[str] = Field(None, max_length=255)


class ConsultantOrganizationRead(CamelModel):
    id: str
    consultant_id: str
    organization_id: str
    role: str
    contact_email: Optional[str] = None
    contact_person: Optional[str] = None
    created_at: datetime
    organization: OrganizationSummary
