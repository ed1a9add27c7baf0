"""
models/report.py
----------------
Report templates and generated reports.

GeneratedReport.sections is a JSON document keyed by section name
(general_info, governance_strategy, ...) whose values are flat objects of
display strings. autofill_provenance records, per "section.field", the value
auto-fill last wrote, so later runs can tell untouched fields from edits.

Lifecycle: draft -> final. A final report is never modified again.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OrganizationScoped, TimestampMixin, generate_uuid, utcnow


class ReportStatus(str, PyEnum):
    draft = "draft"
    final = "final"


class ReportTemplate(Base, TimestampMixin):
    __tablename__ = "report_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    framework: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # esrs, gri, sasb, tcfd
    status: Mapped[str] = mapped_column(String(20), default="coming_soon")
    description: Mapped[Optional[str]] = mapped_column(Text)
    sections: Mapped[Optional[list]] = mapped_column(JSON)


class GeneratedReport(Base, OrganizationScoped):
    __tablename__ = "generated_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    template_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("report_templates.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default=ReportStatus.draft.value)
    language: Mapped[str] = mapped_column(String(2), nullable=False, default="en")
    sections: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    autofill_provenance: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    finalized_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    @property
    def is_final(self) -> bool:
        return self.status == ReportStatus.final.value

    def __repr__(self) -> str:
        return f"<GeneratedReport id={self.id} status={self.status}>"
