"""
api/routes/organizations.py
---------------------------
Organization endpoints.

POST /api/organizations                - Create an organization owned by the caller.
GET  /api/organizations                - Organizations the caller may act on.
GET  /api/organizations/{id}           - One organization (404 missing / 403 not authorized).
GET  /api/consultant-organizations     - Consultant only: linked client organizations.
POST /api/consultant-organizations     - Consultant only: register a client organization.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from app.dependencies import CurrentUser, DbSession, require_consultant
from app.models.user import User
from app.schemas.organization import (
    ClientOrganizationCreate,
    ConsultantOrganizationRead,
    OrganizationCreate,
    OrganizationRead,
    OrganizationSummary,
)
from app.services.access_service import AccessService
from app.services.organization_service import OrganizationService

router = APIRouter(prefix="/api", tags=["Organizations"])

Consultant = Annotated[User, Depends(require_consultant)]


@router.post(
    "/organizations",
    response_model=OrganizationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an organization owned by the current user",
)
async def create_organization(
    body: OrganizationCreate, current_user: CurrentUser, db: DbSession
) -> OrganizationRead:
    organization = await OrganizationService.create_organization(db, body, current_user)
    return OrganizationRead.model_validate(organization)


@router.get(
    "/organizations",
    response_model=List[OrganizationSummary],
    summary="List organizations the current user may act on",
)
async def list_organizations(current_user: CurrentUser, db: DbSession) -> List[OrganizationSummary]:
    return await AccessService.list_accessible_organizations(db, current_user.id)


@router.get(
    "/organizations/{organization_id}",
    response_model=OrganizationRead,
    summary="Get one organization",
)
async def get_organization(
    organization_id: str, current_user: CurrentUser, db: DbSession
) -> OrganizationRead:
    organization = await OrganizationService.get_organization(db, current_user, organization_id)
    return OrganizationRead.model_validate(organization)


@router.get(
    "/consultant-organizations",
    response_model=List[ConsultantOrganizationRead],
    summary="List the consultant's client organizations",
)
async def list_client_organizations(consultant: Consultant, db: DbSession):
    return await OrganizationService.list_client_links(db, consultant)


@router.post(
    "/consultant-organizations",
    response_model=ConsultantOrganizationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a client organization for the consultant",
)
async def create_client_organization(
    body: ClientOrganizationCreate, consultant: Consultant, db: DbSession
):
    return await OrganizationService.create_client_organization(db, body, consultant)
