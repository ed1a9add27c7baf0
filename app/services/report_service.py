"""
services/report_service.py
--------------------------
Report templates and the generated report lifecycle.

Lifecycle: draft -> final. lastModified is stamped by the server on every
change; finalizedAt is stamped when status becomes final. Timestamps sent by
clients are never trusted. A final report rejects any further change.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.report import GeneratedReport, ReportStatus, ReportTemplate
from app.schemas.report import GeneratedReportCreate, GeneratedReportUpdate
from app.services import crud
from app.services.report_assembler import ReportAssembler

logger = get_logger(__name__)

ESRS_TEMPLATE: Dict[str, Any] = {
    "name": "ESRS Complete Report",
    "framework": "European Sustainability Reporting Standards",
    "type": "esrs",
    "status": "available",
    "description": "Complete ESRS report template covering all mandatory disclosures",
    "sections": [
        {"id": "toc", "order": 0, "title": "Table of Contents", "content": ""},
        {"id": "general_info", "order": 1, "title": "General Information", "content": ""},
        {"id": "governance_strategy", "order": 2, "title": "Governance, Strategy & Business Model", "content": ""},
        {"id": "materiality", "order": 3, "title": "Materiality Assessment", "content": ""},
        {"id": "impacts_risks_opportunities", "order": 4, "title": "Impacts, Risks, and Opportunities", "content": ""},
        {"id": "policies_actions_targets", "order": 5, "title": "Policies, Actions, Targets & KPIs", "content": ""},
        {"id": "eu_taxonomy", "order": 6, "title": "EU Taxonomy Alignment", "content": ""},
        {"id": "appendix", "order": 7, "title": "Appendix", "content": ""},
    ],
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_editable(report: GeneratedReport) -> None:
    if report.is_final:
        raise ConflictError("Report is finalized and can no longer be changed")


class ReportService:

    # ── Templates ─────────────────────────────────────────────────────────────

    @staticmethod
    async def seed_report_templates(db: AsyncSession) -> bool:
        """Insert the ESRS template once. Returns True when a row was added."""
        result = await db.execute(
            select(ReportTemplate).where(ReportTemplate.framework == ESRS_TEMPLATE["framework"])
        )
        if result.scalar_one_or_none() is not None:
            logger.info("Report templates already seeded")
            return False
        db.add(ReportTemplate(**ESRS_TEMPLATE))
        await db.flush()
        logger.info("Report template seeded", name=ESRS_TEMPLATE["name"])
        return True

    @staticmethod
    async def list_templates(db: AsyncSession) -> List[ReportTemplate]:
        result = await db.execute(select(ReportTemplate).order_by(ReportTemplate.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_template(db: AsyncSession, template_id: str) -> ReportTemplate:
        template = await db.get(ReportTemplate, template_id)
        if template is None:
            raise NotFoundError("Report template not found")
        return template

    # ── Generated reports ─────────────────────────────────────────────────────

    @staticmethod
    async def list_reports(db: AsyncSession, organization_id: str) -> List[GeneratedReport]:
        result = await db.execute(
            select(GeneratedReport)
            .where(GeneratedReport.organization_id == organization_id)
            .order_by(GeneratedReport.generated_at.desc(), GeneratedReport.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_report(
        db: AsyncSession, organization_id: str, data: GeneratedReportCreate
    ) -> GeneratedReport:
        await ReportService.get_template(db, data.template_id)
        report = GeneratedReport(
            organization_id=organization_id,
            template_id=data.template_id,
            title=data.title,
            language=data.language,
            status=ReportStatus.draft.value,
            sections=data.sections.to_storage() if data.sections else {},
            autofill_provenance={},
        )
        db.add(report)
        await db.flush()
        await db.refresh(report)
        logger.info("Report created", organization_id=organization_id, report_id=report.id)
        return report

    @staticmethod
    async def get_report(db: AsyncSession, report_id: str, user_id: str) -> GeneratedReport:
        return await crud.get_scoped(db, GeneratedReport, report_id, user_id)

    @staticmethod
    async def update_report(
        db: AsyncSession, report_id: str, user_id: str, data: GeneratedReportUpdate
    ) -> GeneratedReport:
        report = await crud.get_scoped(db, GeneratedReport, report_id, user_id)
        _ensure_editable(report)

        now = _now()
        values: Dict[str, Any] = {"last_modified": now}
        if data.title is not None:
            values["title"] = data.title
        if data.language is not None:
            values["language"] = data.language
        if data.sections is not None:
            values["sections"] = data.sections.to_storage()
        if data.status is not None:
            values["status"] = data.status
            if data.status == ReportStatus.final.value:
                values["finalized_at"] = now

        report = await crud.update(db, report, values)
        logger.info(
            "Report updated",
            organization_id=report.organization_id,
            report_id=report.id,
            status=report.status,
        )
        return report

    @staticmethod
    async def delete_report(db: AsyncSession, report_id: str, user_id: str) -> None:
        report = await crud.get_scoped(db, GeneratedReport, report_id, user_id)
        await crud.delete(db, report)
        logger.info("Report deleted", organization_id=report.organization_id, report_id=report_id)

    @staticmethod
    async def autofill_report(
        db: AsyncSession, report_id: str, user_id: str, force: bool = False
    ) -> GeneratedReport:
        """Assemble sections from the organization's data, then save them."""
        report = await crud.get_scoped(db, GeneratedReport, report_id, user_id)
        _ensure_editable(report)

        sections, provenance = await ReportAssembler.assemble(
            db,
            report.organization_id,
            report.sections,
            report.autofill_provenance,
            force=force,
        )
        if sections == report.sections and provenance == report.autofill_provenance:
            return report

        report = await crud.update(
            db,
            report,
            {"sections": sections, "autofill_provenance": provenance, "last_modified": _now()},
        )
        logger.info("Report auto-filled", organization_id=report.organization_id, report_id=report.id)
        return report
