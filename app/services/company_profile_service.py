"""
services/company_profile_service.py
-----------------------------------
Company profile upsert and read.

One profile per organization: a second submission updates the existing row
in place. Child rows (subsidiaries, ownership entries, initiatives, KPIs)
submitted with a save are inserted; existing children are left alone.
Incomplete child entries are skipped. A warning is logged when the stored
ownership percentages of a profile add up to more than 100. The whole write
runs inside the request's single transaction, so a failing child insert
rolls back the profile update too.
"""

from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.company_profile import (
    CompanyProfile,
    OwnershipStructure,
    Subsidiary,
    SustainabilityInitiative,
    SustainabilityKPI,
)
from app.schemas.company_profile import (
    CompanyProfileFields,
    CompanyProfileRead,
    CompanyProfileUpsert,
    InitiativeRead,
    OwnershipRead,
    SubsidiaryRead,
    SustainabilityKPIRead,
)
from app.services import crud

logger = get_logger(__name__)

# child model -> (payload attribute, fields that must be non-empty)
_CHILDREN = {
    Subsidiary: ("subsidiaries", ("name", "country")),
    OwnershipStructure: ("ownership_structure", ("entity_name", "role")),
    SustainabilityInitiative: ("sustainability_initiatives", ("initiative_name", "description")),
    SustainabilityKPI: ("sustainability_kpis", ("goal_title", "goal_description")),
}


def _is_complete(entry, required) -> bool:
    return all(getattr(entry, field) for field in required)


async def _children(db: AsyncSession, model, profile_id: str) -> List[Any]:
    result = await db.execute(
        select(model)
        .where(model.company_profile_id == profile_id)
        .order_by(model.created_at, model.id)
    )
    return list(result.scalars().all())


async def ownership_total(db: AsyncSession, model, profile_id: str) -> int:
    """Sum of ownership percentages over the stored rows of one child table."""
    result = await db.execute(
        select(func.coalesce(func.sum(model.ownership_percentage), 0))
        .where(model.company_profile_id == profile_id)
    )
    return int(result.scalar_one())


class CompanyProfileService:

    @staticmethod
    async def get_profile(db: AsyncSession, organization_id: str) -> CompanyProfileRead:
        profile = await crud.get_one_for_organization(db, CompanyProfile, organization_id)
        if profile is None:
            raise NotFoundError("Company profile not found")
        return await CompanyProfileService.to_read(db, profile)

    @staticmethod
    async def find_profile(db: AsyncSession, organization_id: str) -> CompanyProfile | None:
        return await crud.get_one_for_organization(db, CompanyProfile, organization_id)

    @staticmethod
    async def list_subsidiaries(db: AsyncSession, profile_id: str) -> List[Subsidiary]:
        return await _children(db, Subsidiary, profile_id)

    @staticmethod
    async def upsert_profile(
        db: AsyncSession, organization_id: str, data: CompanyProfileUpsert
    ) -> CompanyProfileRead:
        values: Dict[str, Any] = data.model_dump(include=set(CompanyProfileFields.model_fields))

        profile = await crud.get_one_for_organization(db, CompanyProfile, organization_id)
        try:
            if profile is None:
                profile = await crud.create(db, CompanyProfile, organization_id, values)
                logger.info("Company profile created", organization_id=organization_id)
            else:
                profile = await crud.update(db, profile, values)
                logger.info("Company profile updated", organization_id=organization_id)
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Company profile was modified concurrently, please retry")

        inserted = 0
        for model, (attr, required) in _CHILDREN.items():
            for entry in getattr(data, attr):
                if not _is_complete(entry, required):
                    continue
                db.add(model(company_profile_id=profile.id, **entry.model_dump()))
                inserted += 1
        await db.flush()

        for model, label in ((Subsidiary, "subsidiary"), (OwnershipStructure, "ownership")):
            total = await ownership_total(db, model, profile.id)
            if total > 100:
                logger.warning(
                    "Ownership percentages exceed 100%",
                    organization_id=organization_id,
                    kind=label,
                    total=total,
                )

        logger.info(
            "Company profile children saved",
            organization_id=organization_id,
            inserted=inserted,
        )
        return await CompanyProfileService.to_read(db, profile)

    @staticmethod
    async def to_read(db: AsyncSession, profile: CompanyProfile) -> CompanyProfileRead:
        return CompanyProfileRead.model_validate(profile).model_copy(
            update={
                "subsidiaries": [
                    SubsidiaryRead.model_validate(row)
                    for row in await _children(db, Subsidiary, profile.id)
                ],
                "ownership_structure": [
                    OwnershipRead.model_validate(row)
                    for row in await _children(db, OwnershipStructure, profile.id)
                ],
                "sustainability_initiatives": [
                    InitiativeRead.model_validate(row)
                    for row in await _children(db, SustainabilityInitiative, profile.id)
                ],
                "sustainability_kpis": [
                    SustainabilityKPIRead.model_validate(row)
                    for row in await _children(db, SustainabilityKPI, profile.id)
                ],
            }
        )
