"""
services/crud.py
----------------
Shared organization-scoped persistence helpers used by the domain services.

Every list query carries organization_id in its WHERE clause, and every
by-id lookup re-checks the record's organization against the caller's
authorized set before returning it.
"""

from typing import Any, Dict, List, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.services.access_service import AccessService

ModelT = TypeVar("ModelT")


def _drop_required_nulls(model: type, values: Dict[str, Any]) -> Dict[str, Any]:
    """An explicit null for a NOT NULL column means "leave as is / use the default"."""
    columns = model.__table__.columns
    return {k: v for k, v in values.items() if v is not None or columns[k].nullable}


async def create(
    db: AsyncSession, model: Type[ModelT], organization_id: str, values: Dict[str, Any]
) -> ModelT:
    record = model(organization_id=organization_id, **_drop_required_nulls(model, values))
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record


async def get_scoped(
    db: AsyncSession, model: Type[ModelT], record_id: str, user_id: str
) -> ModelT:
    """
    Load a record by id for the given user.
    Raises NotFoundError if missing, AccessDeniedError if the record belongs
    to an organization the user may not act on.
    """
    record = await db.get(model, record_id)
    if record is None:
        raise NotFoundError(f"{model.__name__} not found")
    await AccessService.ensure_access(db, user_id, record.organization_id)
    return record


async def get_one_for_organization(
    db: AsyncSession, model: Type[ModelT], organization_id: str
) -> ModelT | None:
    """The single row of a one-per-organization table, if any."""
    result = await db.execute(
        select(model).where(model.organization_id == organization_id)
    )
    return result.scalar_one_or_none()


async def list_by_organization(
    db: AsyncSession, model: Type[ModelT], organization_id: str, *criteria
) -> List[ModelT]:
    result = await db.execute(
        select(model)
        .where(model.organization_id == organization_id, *criteria)
        .order_by(model.created_at, model.id)
    )
    return list(result.scalars().all())


async def update(db: AsyncSession, record: ModelT, values: Dict[str, Any]) -> ModelT:
    for field, value in _drop_required_nulls(type(record), values).items():
        setattr(record, field, value)
    await db.flush()
    # onupdate timestamps expire on flush; reload before the caller reads them
    await db.refresh(record)
    return record


async def delete(db: AsyncSession, record: Any) -> None:
    await db.delete(record)
    await db.flush()
