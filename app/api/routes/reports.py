"""
api/routes/reports.py
---------------------
Report templates and generated reports.

GET    /api/report-templates[/{id}]
GET    /api/generated-reports[?organizationId]
POST   /api/generated-reports
GET    /api/generated-reports/{id}
PUT    /api/generated-reports/{id}           - title / language / sections / status
DELETE /api/generated-reports/{id}
POST   /api/generated-reports/{id}/autofill  - fill sections from stored data and save
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, Response, status

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.report import (
    GeneratedReportCreate,
    GeneratedReportRead,
    GeneratedReportUpdate,
    ReportTemplateRead,
)
from app.services.report_service import ReportService

router = APIRouter(prefix="/api", tags=["Reports"])


@router.get("/report-templates", response_model=List[ReportTemplateRead])
async def list_templates(current_user: CurrentUser, db: DbSession):
    return await ReportService.list_templates(db)


@router.get("/report-templates/{template_id}", response_model=ReportTemplateRead)
async def get_template(template_id: str, current_user: CurrentUser, db: DbSession):
    return await ReportService.get_template(db, template_id)


@router.get("/generated-reports", response_model=List[GeneratedReportRead])
async def list_reports(organization_id: OrganizationId, db: DbSession):
    return await ReportService.list_reports(db, organization_id)


@router.post(
    "/generated-reports",
    response_model=GeneratedReportRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    body: GeneratedReportCreate,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await ReportService.create_report(db, resolved, body)


@router.get("/generated-reports/{report_id}", response_model=GeneratedReportRead)
async def get_report(report_id: str, current_user: CurrentUser, db: DbSession):
    return await ReportService.get_report(db, report_id, current_user.id)


@router.put("/generated-reports/{report_id}", response_model=GeneratedReportRead)
async def update_report(
    report_id: str, body: GeneratedReportUpdate, current_user: CurrentUser, db: DbSession
):
    return await ReportService.update_report(db, report_id, current_user.id, body)


@router.delete("/generated-reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(report_id: str, current_user: CurrentUser, db: DbSession) -> Response:
    await ReportService.delete_report(db, report_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/generated-reports/{report_id}/autofill",
    response_model=GeneratedReportRead,
    summary="Fill report sections from the organization's data",
)
async def autofill_report(
    report_id: str,
    current_user: CurrentUser,
    db: DbSession,
    force: bool = False,
):
    """
    Fields a user has edited are never overwritten. Without force, a report
    whose key fields are already filled is returned unchanged.
    """
    return await ReportService.autofill_report(db, report_id, current_user.id, force=force)
