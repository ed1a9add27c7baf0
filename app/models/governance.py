"""
models/governance.py
--------------------
Governance structure: the organization's board oversight arrangement.
Exactly one row per organization.
"""

from typing import Optional

from sqlalchemy import JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid


class GovernanceStructure(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "governance_structure"
    __table_args__ = (
        UniqueConstraint("organization_id", name="uq_governance_structure_org"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    board_oversight_mechanism: Mapped[str] = mapped_column(Text, nullable=False)
    committee_name: Mapped[Optional[str]] = mapped_column(Text)
    committee_composition: Mapped[Optional[list]] = mapped_column(JSON)
    committee_responsibilities: Mapped[Optional[list]] = mapped_column(JSON)
    reporting_line: Mapped[Optional[str]] = mapped_column(Text)
    charter_document: Mapped[Optional[str]] = mapped_column(Text)
