"""
Instructor Entity

Instructor profile owned by a tenant (the owning user).
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel


class Instructor(SQLModel, table=True):
    """
    Instructor entity - profile managed by its owner.

    Business Rules:
    - Email is unique per owner (tenant), stored lowercased
    - user_id links the profile to one User; a User links to at most one Instructor
    - Only the owner can delete or relink the profile
    - A linked instructor may edit name, bio, phone, photo and skills
    """

    __tablename__ = "instructors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    bio: str = Field(default="")
    phone: Optional[str] = Field(default=None, max_length=64)
    photo: Optional[str] = Field(default=None, max_length=1024)
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    user_id: Optional[UUID] = Field(
        default=None, foreign_key="users.id", unique=True, index=True
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_instructor_owner_email", "owner_id", "email", unique=True),
    )
