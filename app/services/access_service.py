"""
services/access_service.py
--------------------------
Organization access resolution.

Every per-organization operation asks this module which organization it may
act on. Rules:

  1. Organizations owned by the user are authoritative. When a user owns at
     least one, consultant links are not consulted.
  2. Otherwise the user's consultant links are used, in link order.
  3. An explicitly requested organization id must be in that set, else
     AccessDeniedError (403).
  4. No explicit id: the first organization of the set. Empty set:
     NotFoundError (404).

Not-found and access-denied stay distinct: the first is a setup problem, the
second a possible access violation.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AccessDeniedError, NotFoundError
from app.core.logging import get_logger
from app.models.organization import ConsultantOrganization, Organization
from app.schemas.organization import OrganizationSummary

logger = get_logger(__name__)


class AccessService:

    @staticmethod
    async def list_accessible_organizations(
        db: AsyncSession, user_id: str
    ) -> List[OrganizationSummary]:
        """Owned organizations first; consultant links only when there are none."""
        owned = await db.execute(
            select(Organization)
            .where(Organization.owner_id == user_id)
            .order_by(Organization.created_at, Organization.id)
        )
        organizations = list(owned.scalars().all())

        if not organizations:
            linked = await db.execute(
                select(Organization)
                .join(
                    ConsultantOrganization,
                    ConsultantOrganization.organization_id == Organization.id,
                )
                .where(ConsultantOrganization.consultant_id == user_id)
                .order_by(ConsultantOrganization.created_at, ConsultantOrganization.id)
            )
            organizations = list(linked.scalars().all())

        return [OrganizationSummary.model_validate(org) for org in organizations]

    @staticmethod
    async def resolve_organization_id(
        db: AsyncSession,
        user_id: str,
        requested_id: Optional[str] = None,
    ) -> str:
        """
        Return the organization id a request acts on.

        Raises:
            AccessDeniedError: requested_id is outside the user's authorized set.
            NotFoundError: nothing requested and the user has no organization.
        """
        organizations = await AccessService.list_accessible_organizations(db, user_id)

        if requested_id:
            if any(org.id == requested_id for org in organizations):
                return requested_id
            logger.warning(
                "Organization access denied",
                user_id=user_id,
                organization_id=requested_id,
            )
            raise AccessDeniedError("Access denied to this organization")

        if not organizations:
            raise NotFoundError("No organization found for this user")
        return organizations[0].id

    @staticmethod
    async def ensure_access(
        db: AsyncSession, user_id: str, organization_id: str
    ) -> None:
        """Guard for record-by-id operations: the record's organization must be authorized."""
        await AccessService.resolve_organization_id(db, user_id, organization_id)
