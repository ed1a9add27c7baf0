"""
api/routes/governance.py
------------------------
GET  /api/governance-structure[?organizationId]  - The organization's single row.
POST /api/governance-structure                   - Upsert it.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.governance import GovernanceStructureRead, GovernanceStructureUpsert
from app.services.governance_service import GovernanceService

router = APIRouter(prefix="/api", tags=["Governance"])


@router.get("/governance-structure", response_model=GovernanceStructureRead)
async def get_governance_structure(organization_id: OrganizationId, db: DbSession):
    return await GovernanceService.get(db, organization_id)


@router.post("/governance-structure", response_model=GovernanceStructureRead)
async def save_governance_structure(
    body: GovernanceStructureUpsert,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await GovernanceService.upsert(db, resolved, body)
