"""
services/esg_data_service.py
----------------------------
ESG data KPI catalog.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.esg_data import EsgDataKpi
from app.schemas.esg_data import EsgDataKpiCreate, EsgDataKpiUpdate
from app.services import crud

logger = get_logger(__name__)


class EsgDataService:

    @staticmethod
    async def list_kpis(db: AsyncSession, organization_id: str) -> List[EsgDataKpi]:
        return await crud.list_by_organization(db, EsgDataKpi, organization_id)

    @staticmethod
    async def list_by_section(
        db: AsyncSession, organization_id: str, section: str
    ) -> List[EsgDataKpi]:
        return await crud.list_by_organization(
            db, EsgDataKpi, organization_id, EsgDataKpi.esg_section == section
        )

    @staticmethod
    async def list_by_topic(
        db: AsyncSession, organization_id: str, topic: str
    ) -> List[EsgDataKpi]:
        return await crud.list_by_organization(
            db, EsgDataKpi, organization_id, EsgDataKpi.esrs_topic == topic
        )

    @staticmethod
    async def create_kpi(
        db: AsyncSession, organization_id: str, data: EsgDataKpiCreate
    ) -> EsgDataKpi:
        kpi = await crud.create(
            db, EsgDataKpi, organization_id, data.model_dump(exclude={"organization_id"})
        )
        logger.info(
            "ESG KPI created",
            organization_id=organization_id,
            kpi_id=kpi.id,
            esrs_topic=kpi.esrs_topic,
        )
        return kpi

    @staticmethod
    async def update_kpi(
        db: AsyncSession, kpi_id: str, user_id: str, data: EsgDataKpiUpdate
    ) -> EsgDataKpi:
        kpi = await crud.get_scoped(db, EsgDataKpi, kpi_id, user_id)
        return await crud.update(db, kpi, data.model_dump(exclude_unset=True))

    @staticmethod
    async def delete_kpi(db: AsyncSession, kpi_id: str, user_id: str) -> None:
        kpi = await crud.get_scoped(db, EsgDataKpi, kpi_id, user_id)
        await crud.delete(db, kpi)
        logger.info("ESG KPI deleted", organization_id=kpi.organization_id, kpi_id=kpi_id)
