"""
models/company_profile.py
-------------------------
Company profile (one per organization) and its child tables.

The children (subsidiaries, ownership entries, initiatives, KPIs) hang off
company_profile_id and are inserted independently of the parent update.
"""

from datetime import date
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid


def _uuid_pk() -> Mapped[str]:
    return mapped_column(String(36), primary_key=True, default=generate_uuid)


def _profile_fk() -> Mapped[str]:
    return mapped_column(
        String(36),
        ForeignKey("company_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class CompanyProfile(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "company_profiles"
    __table_args__ = (
        UniqueConstraint("organization_id", name="uq_company_profile_org"),
    )

    id: Mapped[str] = _uuid_pk()

    # Legal identity
    legal_name: Mapped[str] = mapped_column(Text, nullable=False)
    legal_form: Mapped[str] = mapped_column(Text, nullable=False)
    registered_address: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    nace_sector_code: Mapped[str] = mapped_column(Text, nullable=False)
    fiscal_year_end: Mapped[Optional[date]] = mapped_column(Date)
    reporting_basis: Mapped[Optional[str]] = mapped_column(Text)
    parent_company: Mapped[Optional[str]] = mapped_column(Text)

    # Business model
    key_products: Mapped[Optional[list]] = mapped_column(JSON)
    primary_markets: Mapped[Optional[list]] = mapped_column(JSON)
    supply_chain_description: Mapped[Optional[str]] = mapped_column(Text)

    # Industry classification
    industry_code: Mapped[Optional[str]] = mapped_column(Text)
    eu_taxonomy_eligible: Mapped[bool] = mapped_column(Boolean, default=False)
    eu_taxonomy_details: Mapped[Optional[str]] = mapped_column(Text)
    activity_description: Mapped[Optional[str]] = mapped_column(Text)
    sector_classification: Mapped[Optional[str]] = mapped_column(Text)
    sustainability_classification: Mapped[Optional[str]] = mapped_column(Text)

    # Geography
    countries_of_operation: Mapped[Optional[list]] = mapped_column(JSON)
    registered_hq: Mapped[Optional[str]] = mapped_column(Text)
    number_of_production_sites: Mapped[int] = mapped_column(Integer, default=0)
    site_locations: Mapped[Optional[str]] = mapped_column(Text)
    market_regions: Mapped[Optional[list]] = mapped_column(JSON)

    # Strategy
    sustainability_policies: Mapped[Optional[str]] = mapped_column(Text)
    net_zero_target: Mapped[Optional[int]] = mapped_column(Integer)
    net_zero_target_date: Mapped[Optional[date]] = mapped_column(Date)
    circular_economy_initiatives: Mapped[Optional[str]] = mapped_column(Text)
    governance_oversight: Mapped[Optional[str]] = mapped_column(Text)
    transition_updates: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<CompanyProfile id={self.id} organization_id={self.organization_id}>"


class Subsidiary(Base, TimestampMixin):
    __tablename__ = "subsidiaries"

    id: Mapped[str] = _uuid_pk()
    company_profile_id: Mapped[str] = _profile_fk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text)
    ownership_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    legal_form: Mapped[Optional[str]] = mapped_column(Text)
    relation_to_parent: Mapped[Optional[str]] = mapped_column(Text)


class OwnershipStructure(Base, TimestampMixin):
    __tablename__ = "ownership_structure"

    id: Mapped[str] = _uuid_pk()
    company_profile_id: Mapped[str] = _profile_fk()
    entity_name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)  # Parent, Subsidiary, Shareholder
    ownership_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class SustainabilityInitiative(Base, TimestampMixin):
    __tablename__ = "sustainability_initiatives"

    id: Mapped[str] = _uuid_pk()
    company_profile_id: Mapped[str] = _profile_fk()
    initiative_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    current_status: Mapped[Optional[str]] = mapped_column(Text)  # Planned, Ongoing, Completed
    target_impact: Mapped[Optional[str]] = mapped_column(Text)


class SustainabilityKPI(Base, TimestampMixin):
    __tablename__ = "sustainability_kpis"

    id: Mapped[str] = _uuid_pk()
    company_profile_id: Mapped[str] = _profile_fk()
    goal_title: Mapped[str] = mapped_column(Text, nullable=False)
    goal_description: Mapped[str] = mapped_column(Text, nullable=False)
    target_date: Mapped[Optional[date]] = mapped_column(Date)
    current_progress: Mapped[int] = mapped_column(Integer, default=0)
    indicators: Mapped[Optional[str]] = mapped_column(Text)
