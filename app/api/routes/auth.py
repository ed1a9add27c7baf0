"""
api/routes/auth.py
------------------
Authentication and account endpoints.

POST  /api/register         - Self-registration as organization owner or consultant.
POST  /api/login            - Exchange JSON credentials for a JWT access token.
POST  /api/token            - Same, with OAuth2 form data (Swagger's Authorize popup).
GET   /api/auth/user        - Return the authenticated user's profile.
PATCH /api/user/role        - Pick or change the caller's role.
PATCH /api/user/onboarding  - Mark the caller's onboarding as completed.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import create_access_token
from app.db.session import get_db
from app.dependencies import CurrentUser
from app.models.user import User
from app.schemas.user import (
    LoginRequest,
    RoleUpdate,
    TokenResponse,
    UserRead,
    UserRegister,
)
from app.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid email or password",
    headers={"WWW-Authenticate": "Bearer"},
)


def _issue_token(user: User) -> TokenResponse:
    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        subject=user.id,
        role=user.role,
        expires_delta=expires,
    )
    logger.info("User logged in", user_id=user.id)
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=int(expires.total_seconds()),
        user=UserRead.model_validate(user),
    )


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    body: UserRegister,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    """Duplicate emails (case-insensitive) are rejected with 409."""
    user = await UserService.register_user(db, body)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive a JWT access token",
)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    user = await UserService.authenticate(db, body.email, body.password)
    if user is None:
        raise _INVALID_CREDENTIALS
    return _issue_token(user)


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="OAuth2 password flow login (form data)",
)
async def login_form(
    # The "username" field contains the email address.
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """
    In Swagger UI: use the Authorize button and enter your email as username.
    Via curl: -d "username=you@email.com&password=yourpassword"
    """
    user = await UserService.authenticate(db, form_data.username, form_data.password)
    if user is None:
        raise _INVALID_CREDENTIALS
    return _issue_token(user)


@router.get(
    "/auth/user",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_me(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch("/user/role", response_model=UserRead, summary="Set the caller's role")
async def update_role(
    body: RoleUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    user = await UserService.set_role(db, current_user, body.role)
    return UserRead.model_validate(user)


@router.patch(
    "/user/onboarding",
    response_model=UserRead,
    summary="Mark onboarding as completed",
)
async def complete_onboarding(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    user = await UserService.complete_onboarding(db, current_user)
    return UserRead.model_validate(user)
