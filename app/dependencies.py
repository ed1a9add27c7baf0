"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and organization
scoping.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates and parses the JWT (no DB round-trip).
  3. get_current_user fetches the full User record from the DB, verifying the
     token's sub (user_id) against persisted data.
  4. get_organization_id runs the access resolver on the optional
     ?organizationId= query parameter, so every per-organization route is
     scoped the same way.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AccessDeniedError
from app.core.logging import bind_request_context, get_logger
from app.core.security import decode_access_token
from app.db.session import get_db
from app.models.user import User, UserRole
from app.services.access_service import AccessService

logger = get_logger(__name__)

# tokenUrl must match the form-based login endpoint path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Decode the JWT, then load and return the full User from the database.
    Raises 401 if the token is invalid or the user no longer exists.
    """
    try:
        payload = decode_access_token(token)
        user_id: Optional[str] = payload.get("sub")
        if not user_id:
            raise _CREDENTIALS_EXCEPTION
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _CREDENTIALS_EXCEPTION

    # Always re-verify against DB so deleted users are rejected
    user = await db.get(User, user_id)
    if user is None:
        logger.warning("User from valid JWT not found in DB", user_id=user_id)
        raise _CREDENTIALS_EXCEPTION

    bind_request_context(user_id=user.id)
    return user


async def get_organization_id(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    organization_id: Annotated[Optional[str], Query(alias="organizationId")] = None,
) -> str:
    """The organization this request acts on (404 / 403 per the access rules)."""
    resolved = await AccessService.resolve_organization_id(
        db, current_user.id, organization_id
    )
    bind_request_context(organization_id=resolved)
    return resolved


async def resolve_body_organization(
    db: AsyncSession, user: User, query_id: Optional[str], body_id: Optional[str]
) -> str:
    """
    Write endpoints accept organizationId in the body as well as the query.
    Both go through the resolver; the body value wins when present.
    """
    resolved = await AccessService.resolve_organization_id(db, user.id, body_id or query_id)
    bind_request_context(organization_id=resolved)
    return resolved


async def require_consultant(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Raises 403 if the authenticated user is not a consultant."""
    if current_user.role != UserRole.consultant.value:
        raise AccessDeniedError("Consultant role required")
    return current_user


CurrentUser = Annotated[User, Depends(get_current_user)]
OrganizationId = Annotated[str, Depends(get_organization_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
