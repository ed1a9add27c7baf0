"""
api/routes/risk.py
------------------
Risk and impact management endpoints.

GET  /api/due-diligence-process[?organizationId]  - Single row or null.
POST /api/due-diligence-process                   - Upsert, one row per organization.
PUT  /api/due-diligence-process/{id}              - Update by id.

GET/POST   /api/iro-register        PUT/DELETE /api/iro-register/{id}
GET/POST   /api/action-plans        PUT/DELETE /api/action-plans/{id}
GET        /api/action-plans/iro/{iro_id}
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, Response, status

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.risk import (
    ActionPlanCreate,
    ActionPlanRead,
    ActionPlanUpdate,
    DueDiligenceBase,
    DueDiligenceRead,
    DueDiligenceUpsert,
    IroCreate,
    IroRead,
    IroUpdate,
)
from app.services.risk_service import RiskService

router = APIRouter(prefix="/api", tags=["Risk Management"])

QueryOrganizationId = Annotated[Optional[str], Query(alias="organizationId")]


# ── Due diligence ─────────────────────────────────────────────────────────────

@router.get("/due-diligence-process", response_model=Optional[DueDiligenceRead])
async def get_due_diligence(organization_id: OrganizationId, db: DbSession):
    return await RiskService.find_due_diligence(db, organization_id)


@router.post("/due-diligence-process", response_model=DueDiligenceRead)
async def save_due_diligence(
    body: DueDiligenceUpsert,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: QueryOrganizationId = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await RiskService.upsert_due_diligence(db, resolved, body)


@router.put("/due-diligence-process/{process_id}", response_model=DueDiligenceRead)
async def update_due_diligence(
    process_id: str, body: DueDiligenceBase, current_user: CurrentUser, db: DbSession
):
    return await RiskService.update_due_diligence(db, process_id, current_user.id, body)


# ── IRO register ──────────────────────────────────────────────────────────────

@router.get("/iro-register", response_model=List[IroRead])
async def list_iros(organization_id: OrganizationId, db: DbSession):
    return await RiskService.list_iros(db, organization_id)


@router.post("/iro-register", response_model=IroRead, status_code=status.HTTP_201_CREATED)
async def create_iro(
    body: IroCreate,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: QueryOrganizationId = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await RiskService.create_iro(db, resolved, body)


@router.put("/iro-register/{iro_id}", response_model=IroRead)
async def update_iro(iro_id: str, body: IroUpdate, current_user: CurrentUser, db: DbSession):
    return await RiskService.update_iro(db, iro_id, current_user.id, body)


@router.delete("/iro-register/{iro_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_iro(iro_id: str, current_user: CurrentUser, db: DbSession) -> Response:
    await RiskService.delete_iro(db, iro_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Action plans ──────────────────────────────────────────────────────────────

@router.get("/action-plans", response_model=List[ActionPlanRead])
async def list_action_plans(organization_id: OrganizationId, db: DbSession):
    return await RiskService.list_action_plans(db, organization_id)


@router.get("/action-plans/iro/{iro_id}", response_model=List[ActionPlanRead])
async def list_action_plans_for_iro(iro_id: str, current_user: CurrentUser, db: DbSession):
    return await RiskService.list_action_plans_for_iro(db, iro_id, current_user.id)


@router.post("/action-plans", response_model=ActionPlanRead, status_code=status.HTTP_201_CREATED)
async def create_action_plan(
    body: ActionPlanCreate,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: QueryOrganizationId = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await RiskService.create_action_plan(db, resolved, body)


@router.put("/action-plans/{plan_id}", response_model=ActionPlanRead)
async def update_action_plan(
    plan_id: str, body: ActionPlanUpdate, current_user: CurrentUser, db: DbSession
):
    return await RiskService.update_action_plan(db, plan_id, current_user.id, body)


@router.delete("/action-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_action_plan(plan_id: str, current_user: CurrentUser, db: DbSession) -> Response:
    await RiskService.delete_action_plan(db, plan_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
