"""
services/user_service.py
------------------------
Business logic for user registration, authentication and profile updates.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError
from app.core.logging import get_logger
from app.core.security import hash_password, verify_password
from app.models.user import User, UserRole
from app.schemas.user import UserRegister

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def register_user(db: AsyncSession, data: UserRegister) -> User:
        """
        Self-registration as an organization owner or a consultant.
        Raises ConflictError on duplicate email.
        """
        user = User(
            email=data.email.lower(),
            hashed_password=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role.value,
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Email '{data.email}' is already registered")
        logger.info("User registered", user_id=user.id, role=user.role)
        return user

    @staticmethod
    async def authenticate(
        db: AsyncSession, email: str, password: str
    ) -> User | None:
        """
        Verify credentials and return the User if valid, else None.
        Email lookup is case-insensitive.
        """
        result = await db.execute(
            select(User).where(User.email == email.lower())
        )
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    async def set_role(db: AsyncSession, user: User, role: UserRole) -> User:
        user.role = role.value
        await db.flush()
        await db.refresh(user)
        logger.info("User role updated", user_id=user.id, role=user.role)
        return user

    @staticmethod
    async def complete_onboarding(db: AsyncSession, user: User) -> User:
        user.onboarding_completed = True
        await db.flush()
        await db.refresh(user)
        logger.info("Onboarding completed", user_id=user.id)
        return user
