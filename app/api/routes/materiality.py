"""
api/routes/materiality.py
-------------------------
GET    /api/materiality-topics[?organizationId]  - Topics of the resolved organization.
POST   /api/materiality-topics                   - Upsert by topic name.
PATCH  /api/materiality-topics/{id}              - Partial update.
DELETE /api/materiality-topics/{id}              - Delete.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, Response, status

from app.dependencies import CurrentUser, DbSession, OrganizationId, resolve_body_organization
from app.schemas.materiality import (
    MaterialityTopicRead,
    MaterialityTopicUpdate,
    MaterialityTopicUpsert,
)
from app.services.materiality_service import MaterialityService

router = APIRouter(prefix="/api/materiality-topics", tags=["Materiality"])


@router.get("", response_model=List[MaterialityTopicRead])
async def list_topics(organization_id: OrganizationId, db: DbSession):
    return await MaterialityService.list_topics(db, organization_id)


@router.post("", response_model=MaterialityTopicRead, summary="Create or update a topic by name")
async def upsert_topic(
    body: MaterialityTopicUpsert,
    current_user: CurrentUser,
    db: DbSession,
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
):
    resolved = await resolve_body_organization(db, current_user, organization_id, body.organization_id)
    return await MaterialityService.upsert_topic(db, resolved, body)


@router.patch("/{topic_id}", response_model=MaterialityTopicRead)
async def update_topic(
    topic_id: str, body: MaterialityTopicUpdate, current_user: CurrentUser, db: DbSession
):
    return await MaterialityService.update_topic(db, topic_id, current_user.id, body)


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(topic_id: str, current_user: CurrentUser, db: DbSession) -> Response:
    await MaterialityService.delete_topic(db, topic_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
