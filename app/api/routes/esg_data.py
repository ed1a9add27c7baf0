"""
api/routes/esg_data.py
----------------------
ESG data KPI catalog endpoints.

GET/POST   /api/esg-data-kpis
PUT/DELETE /api/esg-data-kpis/{id}
GET        /api/esg-data-kpis/section/{section}
GET        /api/esg-data-kpis/topic/{topic}
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, Response, status

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.esg_data import EsgDataKpiCreate, EsgDataKpiRead, EsgDataKpiUpdate, EsgSection
from app.services.esg_data_service import EsgDataService

router = APIRouter(prefix="/api/esg-data-kpis", tags=["ESG Data"])


@router.get("", response_model=List[EsgDataKpiRead])
async def list_kpis(organization_id: OrganizationId, db: DbSession):
    return await EsgDataService.list_kpis(db, organization_id)


@router.get("/section/{section}", response_model=List[EsgDataKpiRead])
async def list_kpis_by_section(section: EsgSection, organization_id: OrganizationId, db: DbSession):
    return await EsgDataService.list_by_section(db, organization_id, section)


@router.get("/topic/{topic}", response_model=List[EsgDataKpiRead])
async def list_kpis_by_topic(topic: str, organization_id: OrganizationId, db: DbSession):
    return await EsgDataService.list_by_topic(db, organization_id, topic)


@router.post("", response_model=EsgDataKpiRead, status_code=status.HTTP_201_CREATED)
async def create_kpi(
    body: EsgDataKpiCreate,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await EsgDataService.create_kpi(db, resolved, body)


@router.put("/{kpi_id}", response_model=EsgDataKpiRead)
async def update_kpi(kpi_id: str, body: EsgDataKpiUpdate, current_user: CurrentUser, db: DbSession):
    return await EsgDataService.update_kpi(db, kpi_id, current_user.id, body)


@router.delete("/{kpi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_kpi(kpi_id: str, current_user: CurrentUser, db: DbSession) -> Response:
    await EsgDataService.delete_kpi(db, kpi_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
