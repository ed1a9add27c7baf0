"""
models/user.py
--------------
User ORM model.

Role design:
  - 'organization': owns zero or more organizations directly.
  - 'consultant':   acts on behalf of client organizations through
                    consultant_organizations link rows.
  - NULL:           registered but has not picked a role yet.

The hashed_password column stores bcrypt hashes only. Plain text is
never stored and never logged. Users are never hard-deleted.
"""

import uuid
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class UserRole(str, PyEnum):
    organization = "organization"
    consultant = "consultant"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    last_name: Mapped[Optional[str]] = mapped_column(String(255))
    role: Mapped[Optional[str]] = mapped_column(String(20))
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
