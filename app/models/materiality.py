"""
models/materiality.py
---------------------
Materiality topics scored on financial and stakeholder impact.

The natural key is (organization_id, topic): submitting the same topic name
again updates the existing row instead of adding a new one.
"""

from typing import Optional

from sqlalchemy import JSON, Boolean, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid


class MaterialityTopic(Base, OrganizationScoped, TimestampMixin):
    __tablename__ = "materiality_topics"
    __table_args__ = (
        UniqueConstraint("organization_id", "topic", name="uq_materiality_topic_org_topic"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(20))  # environmental, social, governance
    subcategory: Mapped[Optional[str]] = mapped_column(String(20))  # E1-E5, S1-S4, G1
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)

    # Scoring, 0-5 scale
    financial_impact_score: Mapped[Optional[int]] = mapped_column(Integer)
    impact_on_stakeholders: Mapped[Optional[int]] = mapped_column(Integer)
    stakeholder_concern_level: Mapped[Optional[str]] = mapped_column(String(10))
    materiality_index: Mapped[Optional[float]] = mapped_column(Float)
    is_material: Mapped[bool] = mapped_column(Boolean, default=False)

    scoring_justification: Mapped[Optional[str]] = mapped_column(Text)
    why_material: Mapped[Optional[str]] = mapped_column(Text)
    impacted_stakeholders: Mapped[Optional[list]] = mapped_column(JSON)
    business_risk_or_opportunity: Mapped[Optional[str]] = mapped_column(String(20))
    linked_standards: Mapped[Optional[list]] = mapped_column(JSON)
    management_response: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<MaterialityTopic id={self.id} topic={self.topic} index={self.materiality_index}>"
