"""
User Entity

Represents an account that can own courses or act as an instructor.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from .enums import UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - login identity and role set.

    Business Rules:
    - Username is globally unique and, by convention, an email address
    - Password stored as bcrypt hash
    - Roles are a subset of UserRole, default [student]
    - instructor_id back-references the linked Instructor (at most one)
    - Invited users cannot sign in until they accept their invite
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    hashed_password: str = Field(max_length=60)  # Bcrypt output is 60 chars

    roles: List[str] = Field(
        default_factory=lambda: [UserRole.student.value], sa_column=Column(JSON)
    )
    instructor_id: Optional[UUID] = Field(default=None)

    status: UserStatus = Field(default=UserStatus.active)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status", "status"),)
