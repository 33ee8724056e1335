"""
InviteToken Entity

Single-use invite tokens that let an instructor set their password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class InviteToken(SQLModel, table=True):
    """
    InviteToken entity - hashed single-use invite secret.

    Business Rules:
    - Only the SHA-256 hash of the raw token is stored
    - Bound to (user, instructor, owner)
    - Expired tokens are purged
    - Consuming a token sets used_at and deletes sibling tokens for the instructor
    """

    __tablename__ = "invite_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    instructor_id: UUID = Field(foreign_key="instructors.id", nullable=False, index=True)
    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_invite_token_expires_at", "expires_at"),)
