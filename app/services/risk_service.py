"""
services/risk_service.py
------------------------
Due diligence process, IRO register and action plans.
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.risk import ActionPlan, DueDiligenceProcess, IroRegister
from app.schemas.risk import (
    ActionPlanCreate,
    ActionPlanUpdate,
    DueDiligenceBase,
    DueDiligenceUpsert,
    IroCreate,
    IroUpdate,
)
from app.services import crud

logger = get_logger(__name__)


async def _check_iro(db: AsyncSession, organization_id: str, iro_id: Optional[str]) -> None:
    """An action plan may only point at an IRO of its own organization."""
    if not iro_id:
        return
    iro = await db.get(IroRegister, iro_id)
    if iro is None or iro.organization_id != organization_id:
        raise NotFoundError("IRO not found")


class RiskService:

    # ── Due diligence ─────────────────────────────────────────────────────────

    @staticmethod
    async def find_due_diligence(
        db: AsyncSession, organization_id: str
    ) -> DueDiligenceProcess | None:
        return await crud.get_one_for_organization(db, DueDiligenceProcess, organization_id)

    @staticmethod
    async def upsert_due_diligence(
        db: AsyncSession, organization_id: str, data: DueDiligenceUpsert
    ) -> DueDiligenceProcess:
        values = data.model_dump(exclude={"organization_id"})
        existing = await RiskService.find_due_diligence(db, organization_id)
        try:
            if existing is None:
                process = await crud.create(db, DueDiligenceProcess, organization_id, values)
            else:
                process = await crud.update(db, existing, values)
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Due diligence process was modified concurrently, please retry")
        logger.info(
            "Due diligence process saved",
            organization_id=organization_id,
            created=existing is None,
        )
        return process

    @staticmethod
    async def update_due_diligence(
        db: AsyncSession, process_id: str, user_id: str, data: DueDiligenceBase
    ) -> DueDiligenceProcess:
        process = await crud.get_scoped(db, DueDiligenceProcess, process_id, user_id)
        return await crud.update(db, process, data.model_dump(exclude_unset=True))

    # ── IRO register ──────────────────────────────────────────────────────────

    @staticmethod
    async def list_iros(db: AsyncSession, organization_id: str) -> List[IroRegister]:
        return await crud.list_by_organization(db, IroRegister, organization_id)

    @staticmethod
    async def create_iro(
        db: AsyncSession, organization_id: str, data: IroCreate
    ) -> IroRegister:
        iro = await crud.create(
            db, IroRegister, organization_id, data.model_dump(exclude={"organization_id"})
        )
        logger.info("IRO created", organization_id=organization_id, iro_id=iro.id, iro_type=iro.iro_type)
        return iro

    @staticmethod
    async def update_iro(
        db: AsyncSession, iro_id: str, user_id: str, data: IroUpdate
    ) -> IroRegister:
        iro = await crud.get_scoped(db, IroRegister, iro_id, user_id)
        return await crud.update(db, iro, data.model_dump(exclude_unset=True))

    @staticmethod
    async def delete_iro(db: AsyncSession, iro_id: str, user_id: str) -> None:
        iro = await crud.get_scoped(db, IroRegister, iro_id, user_id)
        await crud.delete(db, iro)
        logger.info("IRO deleted", organization_id=iro.organization_id, iro_id=iro_id)

    # ── Action plans ──────────────────────────────────────────────────────────

    @staticmethod
    async def list_action_plans(db: AsyncSession, organization_id: str) -> List[ActionPlan]:
        return await crud.list_by_organization(db, ActionPlan, organization_id)

    @staticmethod
    async def list_action_plans_for_iro(
        db: AsyncSession, iro_id: str, user_id: str
    ) -> List[ActionPlan]:
        iro = await crud.get_scoped(db, IroRegister, iro_id, user_id)
        return await crud.list_by_organization(
            db, ActionPlan, iro.organization_id, ActionPlan.iro_id == iro.id
        )

    @staticmethod
    async def create_action_plan(
        db: AsyncSession, organization_id: str, data: ActionPlanCreate
    ) -> ActionPlan:
        await _check_iro(db, organization_id, data.iro_id)
        plan = await crud.create(
            db, ActionPlan, organization_id, data.model_dump(exclude={"organization_id"})
        )
        logger.info("Action plan created", organization_id=organization_id, action_plan_id=plan.id)
        return plan

    @staticmethod
    async def update_action_plan(
        db: AsyncSession, plan_id: str, user_id: str, data: ActionPlanUpdate
    ) -> ActionPlan:
        plan = await crud.get_scoped(db, ActionPlan, plan_id, user_id)
        values = data.model_dump(exclude_unset=True)
        if "iro_id" in values:
            await _check_iro(db, plan.organization_id, values["iro_id"])
        return await crud.update(db, plan, values)

    @staticmethod
    async def delete_action_plan(db: AsyncSession, plan_id: str, user_id: str) -> None:
        plan = await crud.get_scoped(db, ActionPlan, plan_id, user_id)
        await crud.delete(db, plan)
        logger.info("Action plan deleted", organization_id=plan.organization_id, action_plan_id=plan_id)
