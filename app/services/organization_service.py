"""
services/organization_service.py
--------------------------------
Business logic for organizations and consultant client links.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (access checks, ownerless client organizations)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from datetime import date
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.models.organization import ConsultantOrganization, Organization
from app.models.user import User
from app.schemas.organization import (
    ClientOrganizationCreate,
    OrganizationCreate,
    OrganizationSummary,
)
from app.services.access_service import AccessService

logger = get_logger(__name__)


def _new_organization(data: OrganizationCreate) -> Organization:
    return Organization(
        name=data.name,
        industry=data.industry,
        business_type=data.business_type,
        country=data.country,
        employee_count=data.employee_count,
        annual_revenue=data.annual_revenue,
        reporting_year=data.reporting_year or date.today().year,
    )


def _link_view(link: ConsultantOrganization, organization: Organization) -> Dict[str, Any]:
    return {
        "id": link.id,
        "consultant_id": link.consultant_id,
        "organization_id": link.organization_id,
        "role": link.role,
        "contact_email": link.contact_email,
        "contact_person": link.contact_person,
        "created_at": link.created_at,
        "organization": OrganizationSummary.model_validate(organization),
    }


class OrganizationService:

    @staticmethod
    async def create_organization(
        db: AsyncSession, data: OrganizationCreate, owner: User
    ) -> Organization:
        """Create an organization owned by the given user."""
        organization = _new_organization(data)
        organization.owner_id = owner.id
        db.add(organization)
        await db.flush()
        await db.refresh(organization)
        logger.info(
            "Organization created",
            organization_id=organization.id,
            owner_id=owner.id,
        )
        return organization

    @staticmethod
    async def get_organization(
        db: AsyncSession, user: User, organization_id: str
    ) -> Organization:
        """
        Full organization record.
        Raises NotFoundError if it does not exist, AccessDeniedError if it is
        outside the user's authorized set.
        """
        organization = await db.get(Organization, organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        await AccessService.ensure_access(db, user.id, organization_id)
        return organization

    @staticmethod
    async def list_client_links(
        db: AsyncSession, consultant: User
    ) -> List[Dict[str, Any]]:
        """Consultant link rows joined with their organization summary."""
        result = await db.execute(
            select(ConsultantOrganization, Organization)
            .join(Organization, Organization.id == ConsultantOrganization.organization_id)
            .where(ConsultantOrganization.consultant_id == consultant.id)
            .order_by(ConsultantOrganization.created_at, ConsultantOrganization.id)
        )
        return [_link_view(link, organization) for link, organization in result.all()]

    @staticmethod
    async def create_client_organization(
        db: AsyncSession, data: ClientOrganizationCreate, consultant: User
    ) -> Dict[str, Any]:
        """
        A consultant registers a client: the organization is created without
        an owner and linked to the consultant.
        """
        organization = _new_organization(data)
        db.add(organization)
        await db.flush()

        link = ConsultantOrganization(
            consultant_id=consultant.id,
            organization_id=organization.id,
            contact_email=data.contact_email,
            contact_person=data.contact_person,
        )
        db.add(link)
        await db.flush()
        await db.refresh(organization)
        await db.refresh(link)

        logger.info(
            "Client organization created",
            organization_id=organization.id,
            consultant_id=consultant.id,
        )
        return _link_view(link, organization)
