"""
api/routes/company_profile.py
-----------------------------
GET  /api/company-profile[?organizationId]  - Profile plus child collections.
POST /api/company-profile                   - Upsert profile, insert child rows.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.company_profile import CompanyProfileRead, CompanyProfileUpsert
from app.services.company_profile_service import CompanyProfileService

router = APIRouter(prefix="/api", tags=["Company Profile"])


@router.get("/company-profile", response_model=CompanyProfileRead)
async def get_company_profile(organization_id: OrganizationId, db: DbSession) -> CompanyProfileRead:
    return await CompanyProfileService.get_profile(db, organization_id)


@router.post("/company-profile", response_model=CompanyProfileRead)
async def save_company_profile(
    body: CompanyProfileUpsert,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
) -> CompanyProfileRead:
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await CompanyProfileService.upsert_profile(db, resolved, body)
