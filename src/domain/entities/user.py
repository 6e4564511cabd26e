"""
User Entity

Represents a customer, guide or administrator of the tour platform.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - identity record used for authentication.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12), never in plaintext
    - Reset token stored as SHA-256 hex digest, always paired with an expiry
    - password_changed_at invalidates session tokens issued before it
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    photo: str = Field(default="default.jpg", max_length=255)
    role: UserRole = Field(default=UserRole.user)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Password reset (forgotPassword / resetPassword)
    password_reset_token: Optional[str] = Field(
        default=None, index=True, max_length=64
    )
    password_reset_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_expires", "password_reset_expires"),)

    def changed_password_after(self, issued_at: int) -> bool:
        """True when the password changed after a token issued at `issued_at` (epoch seconds)."""
        if self.password_changed_at is None:
            return False
        changed_timestamp = int(self.password_changed_at.replace(tzinfo=UTC).timestamp())
        return issued_at < changed_timestamp
