"""
services/materiality_service.py
-------------------------------
Materiality topics.

Topics are upserted by name within an organization. Scoring:

    index = 0.4 * financial + 0.4 * stakeholder_impact + 0.2 * concern

with concern high=5, medium=3, anything else 1, rounded to two decimals.
A topic is material when its index reaches MATERIALITY_THRESHOLD. An
explicit materialityIndex / isMaterial in the payload takes precedence.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ConflictError
from app.core.logging import get_logger
from app.models.materiality import MaterialityTopic
from app.schemas.materiality import MaterialityTopicUpdate, MaterialityTopicUpsert
from app.services import crud

logger = get_logger(__name__)

_CONCERN_SCORES = {"high": 5, "medium": 3}

_WEIGHT_FINANCIAL = 0.4
_WEIGHT_STAKEHOLDER = 0.4
_WEIGHT_CONCERN = 0.2


def materiality_index(
    financial: int, stakeholder_impact: int, concern_level: Optional[str]
) -> float:
    concern = _CONCERN_SCORES.get(concern_level or "", 1)
    return round(
        _WEIGHT_FINANCIAL * financial
        + _WEIGHT_STAKEHOLDER * stakeholder_impact
        + _WEIGHT_CONCERN * concern,
        2,
    )


_SCORE_FIELDS = ("financial_impact_score", "impact_on_stakeholders", "stakeholder_concern_level")


def apply_scoring(values: Dict[str, Any], current: Optional[MaterialityTopic] = None) -> Dict[str, Any]:
    """
    Fill materiality_index / is_material for this submission.

    The index is re-derived only when the submission carries a score; stored
    scores alone never overwrite a stored index. is_material follows the
    index only when the index was set by this submission.
    """

    def pick(field: str):
        if field in values:
            return values[field]
        return getattr(current, field, None)

    if values.get("materiality_index") is None:
        if any(field in values for field in _SCORE_FIELDS):
            financial = pick("financial_impact_score")
            stakeholder = pick("impact_on_stakeholders")
            if financial is not None and stakeholder is not None:
                values["materiality_index"] = materiality_index(
                    financial, stakeholder, pick("stakeholder_concern_level")
                )

    if values.get("is_material") is None:
        values.pop("is_material", None)
        index = values.get("materiality_index")
        if index is not None:
            values["is_material"] = index >= settings.MATERIALITY_THRESHOLD
    return values


class MaterialityService:

    @staticmethod
    async def list_topics(db: AsyncSession, organization_id: str) -> List[MaterialityTopic]:
        return await crud.list_by_organization(db, MaterialityTopic, organization_id)

    @staticmethod
    async def upsert_topic(
        db: AsyncSession, organization_id: str, data: MaterialityTopicUpsert
    ) -> MaterialityTopic:
        """
        Insert the topic, or update the existing row with the same name.
        The latest submission wins field by field for every field it sends.
        """
        result = await db.execute(
            select(MaterialityTopic).where(
                MaterialityTopic.organization_id == organization_id,
                MaterialityTopic.topic == data.topic,
            )
        )
        existing = result.scalar_one_or_none()

        values = data.model_dump(exclude={"organization_id"}, exclude_unset=True)
        values["topic"] = data.topic
        values = apply_scoring(values, existing)

        try:
            if existing is None:
                topic = await crud.create(db, MaterialityTopic, organization_id, values)
            else:
                topic = await crud.update(db, existing, values)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Topic '{data.topic}' was saved concurrently, please retry")

        logger.info(
            "Materiality topic saved",
            organization_id=organization_id,
            topic=topic.topic,
            materiality_index=topic.materiality_index,
            created=existing is None,
        )
        return topic

    @staticmethod
    async def update_topic(
        db: AsyncSession, topic_id: str, user_id: str, data: MaterialityTopicUpdate
    ) -> MaterialityTopic:
        topic = await crud.get_scoped(db, MaterialityTopic, topic_id, user_id)
        values = apply_scoring(data.model_dump(exclude_unset=True), topic)
        try:
            return await crud.update(db, topic, values)
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Another topic with this name already exists")

    @staticmethod
    async def delete_topic(db: AsyncSession, topic_id: str, user_id: str) -> None:
        topic = await crud.get_scoped(db, MaterialityTopic, topic_id, user_id)
        await crud.delete(db, topic)
        logger.info(
            "Materiality topic deleted",
            organization_id=topic.organization_id,
            topic_id=topic_id,
        )
