"""
schemas/company_profile.py
--------------------------
Company profile upsert payload and response.

Child rows are accepted loosely: an entry missing its required fields is
skipped by the service rather than failing the whole submission.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel


# ── Children ──────────────────────────────────────────────────────────────────

class SubsidiaryIn(CamelModel):
    name: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    ownership_percentage: int = Field(0, ge=0, le=100)
    legal_form: Optional[str] = None
    relation_to_parent: Optional[str] = None


class SubsidiaryRead(SubsidiaryIn):
    id: str
    company_profile_id: str
    name: str
    country: str


class OwnershipIn(CamelModel):
    entity_name: Optional[str] = None
    role: Optional[str] = None
    ownership_percentage: int = Field(0, ge=0, le=100)


class OwnershipRead(OwnershipIn):
    id: str
    company_profile_id: str
    entity_name: str
    role: str


class InitiativeIn(CamelModel):
    initiative_name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current_status: Optional[str] = None
    target_impact: Optional[str] = None


class InitiativeRead(InitiativeIn):
    id: str
    company_profile_id: str
    initiative_name: str
    description: str


class SustainabilityKPIIn(CamelModel):
    goal_title: Optional[str] = None
    goal_description: Optional[str] = None
    target_date: Optional[date] = None
    current_progress: int = Field(0, ge=0, le=100)
    indicators: Optional[str] = None


class SustainabilityKPIRead(SustainabilityKPIIn):
    id: str
    company_profile_id: str
    goal_title: str
    goal_description: str


# ── Profile ───────────────────────────────────────────────────────────────────

class CompanyProfileFields(CamelModel):
    legal_name: str = Field(..., min_length=1)
    legal_form: str = Field(..., min_length=1)
    registered_address: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    nace_sector_code: str = Field(..., min_length=1)
    fiscal_year_end: Optional[date] = None
    reporting_basis: Optional[str] = None
    parent_company: Optional[str] = None

    key_products: Optional[List[str]] = None
    primary_markets: Optional[List[str]] = None
    supply_chain_description: Optional[str] = None

    industry_code: Optional[str] = None
    eu_taxonomy_eligible: bool = False
    eu_taxonomy_details: Optional[str] = None
    activity_description: Optional[str] = None
    sector_classification: Optional[str] = None
    sustainability_classification: Optional[str] = None

    countries_of_operation: Optional[List[str]] = None
    registered_hq: Optional[str] = Field(None, alias="registeredHQ")
    number_of_production_sites: int = Field(0, ge=0)
    site_locations: Optional[str] = None
    market_regions: Optional[List[str]] = None

    sustainability_policies: Optional[str] = None
    net_zero_target: Optional[int] = None
    net_zero_target_date: Optional[date] = None
    circular_economy_initiatives: Optional[str] = None
    governance_oversight: Optional[str] = None
    transition_updates: Optional[str] = None


class CompanyProfileUpsert(CompanyProfileFields):
    organization_id: Optional[str] = None
    subsidiaries: List[SubsidiaryIn] = []
    ownership_structure: List[OwnershipIn] = []
    sustainability_initiatives: List[InitiativeIn] = []
    sustainability_kpis: List[SustainabilityKPIIn] = Field(
        default_factory=list, alias="sustainabilityKPIs"
    )


class CompanyProfileRead(CompanyProfileFields):
    id: str
    organization_id: str
    created_at: datetime
    updated_at: datetime
    subsidiaries: List[SubsidiaryRead] = []
    ownership_structure: List[OwnershipRead] = []
    sustainability_initiatives: List[InitiativeRead] = []
    sustainability_kpis: List[SustainabilityKPIRead] = Field(
        default_factory=list, alias="sustainabilityKPIs"
    )
