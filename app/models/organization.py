"""
models/organization.py
----------------------
Organization (tenant) and consultant link models.

Each organization is an isolated tenant. Every domain record carries an
organization_id and is always queried with it in the WHERE clause.

Two paths grant a user access to an organization:
  - ownership:  organizations.owner_id == user.id
  - consulting: a consultant_organizations row links the consultant to it
Organizations created by a consultant for a client have no owner.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, generate_uuid, utcnow


class Organization(Base, TimestampMixin):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[Optional[str]] = mapped_column(String(255))
    business_type: Mapped[Optional[str]] = mapped_column(String(255))
    country: Mapped[Optional[str]] = mapped_column(String(255))
    employee_count: Mapped[Optional[int]] = mapped_column(Integer)
    annual_revenue: Mapped[Optional[str]] = mapped_column(String(255))
    reporting_year: Mapped[Optional[int]] = mapped_column(Integer)
    owner_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name}>"


class ConsultantOrganization(Base):
    __tablename__ = "consultant_organizations"
    __table_args__ = (
        UniqueConstraint("consultant_id", "organization_id", name="uq_consultant_org"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    consultant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="consultant")
    contact_email: Mapped[Optional[str]] = mapped_column(String(320))
    contact_person: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<ConsultantOrganization consultant_id={self.consultant_id} "
            f"organization_id={self.organization_id}>"
        )
