"""
models/risk.py
--------------
Risk and impact management records.

DueDiligenceProcess: one row per organization.
IroRegister:         impacts, risks and opportunities.
ActionPlan:          responses, optionally tied to one IRO of the same
                     organization.
"""

from datetime import date
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid


class DueDiligenceProcess(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "due_diligence_process"
    __table_args__ = (
        UniqueConstraint("organization_id", name="uq_due_diligence_process_org"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    frameworks: Mapped[Optional[list]] = mapped_column(JSON)  # UNGPs, OECD Guidelines, ...
    scope_description: Mapped[Optional[str]] = mapped_column(Text)
    governance_oversight: Mapped[Optional[str]] = mapped_column(String(255))
    process_description: Mapped[Optional[str]] = mapped_column(Text)
    frequency: Mapped[Optional[str]] = mapped_column(String(100))
    stakeholder_involvement: Mapped[Optional[list]] = mapped_column(JSON)
    grievance_mechanism_available: Mapped[Optional[bool]] = mapped_column(Boolean)
    grievance_mechanism_description: Mapped[Optional[str]] = mapped_column(Text)
    supporting_documents: Mapped[Optional[list]] = mapped_column(JSON)


class IroRegister(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "iro_register"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    iro_type: Mapped[Optional[str]] = mapped_column(String(30))
    category: Mapped[Optional[str]] = mapped_column(String(100))
    iro_title: Mapped[str] = mapped_column(String(255), nullable=False)
    iro_description: Mapped[Optional[str]] = mapped_column(Text)
    likelihood: Mapped[Optional[int]] = mapped_column(Integer)
    severity_magnitude: Mapped[Optional[int]] = mapped_column(Integer)
    time_horizon: Mapped[Optional[str]] = mapped_column(String(20))  # Short, Medium, Long
    affected_stakeholders: Mapped[Optional[list]] = mapped_column(JSON)
    value_chain_location: Mapped[Optional[str]] = mapped_column(String(255))
    financial_materiality: Mapped[Optional[bool]] = mapped_column(Boolean)
    impact_materiality: Mapped[Optional[bool]] = mapped_column(Boolean)
    linked_strategy_goal: Mapped[Optional[list]] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<IroRegister id={self.id} type={self.iro_type} title={self.iro_title}>"


class ActionPlan(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "action_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    iro_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("iro_register.id", ondelete="SET NULL"),
        index=True,
    )
    response_type: Mapped[Optional[str]] = mapped_column(String(100))
    response_description: Mapped[Optional[str]] = mapped_column(Text)
    target_outcome: Mapped[Optional[str]] = mapped_column(Text)
    responsible_department: Mapped[Optional[str]] = mapped_column(String(255))
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    budget_amount: Mapped[Optional[float]] = mapped_column(Numeric(14, 2, asdecimal=False))
    budget_currency: Mapped[str] = mapped_column(String(3), default="EUR")
