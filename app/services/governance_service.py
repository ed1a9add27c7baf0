"""
services/governance_service.py
------------------------------
Governance structure: one row per organization, exposed as a single upsert.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.governance import GovernanceStructure
from app.schemas.governance import GovernanceStructureUpsert
from app.services import crud

logger = get_logger(__name__)


class GovernanceService:

    @staticmethod
    async def find(db: AsyncSession, organization_id: str) -> GovernanceStructure | None:
        return await crud.get_one_for_organization(db, GovernanceStructure, organization_id)

    @staticmethod
    async def get(db: AsyncSession, organization_id: str) -> GovernanceStructure:
        structure = await GovernanceService.find(db, organization_id)
        if structure is None:
            raise NotFoundError("Governance structure not found")
        return structure

    @staticmethod
    async def upsert(
        db: AsyncSession, organization_id: str, data: GovernanceStructureUpsert
    ) -> GovernanceStructure:
        values = data.model_dump(exclude={"organization_id"})
        existing = await GovernanceService.find(db, organization_id)
        try:
            if existing is None:
                structure = await crud.create(db, GovernanceStructure, organization_id, values)
            else:
                structure = await crud.update(db, existing, values)
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Governance structure was modified concurrently, please retry")
        logger.info(
            "Governance structure saved",
            organization_id=organization_id,
            created=existing is None,
        )
        return structure
