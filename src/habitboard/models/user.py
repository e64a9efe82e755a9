"""User model for the local backend."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(SQLModel, table=True):
    """Local account; the hosted backend keeps its own users."""

    __tablename__: ClassVar[str] = "user"

    id: str = Field(default_factory=_new_user_id, primary_key=True, max_length=36)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    last_login: Optional[datetime] = Field(default=None)

    habits = Relationship(
        back_populates="user",
        sa_relationship=relationship("Habit", back_populates="user"),
    )
