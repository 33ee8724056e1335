"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional
from pydantic import BaseModel

from coursedesk.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class SignUpCommand(BaseModel):
    """Validated sign-up intent"""

    username: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class TokenResponse(BaseModel):
    """Bearer token issued on sign-up and sign-in"""

    token: str


class UserInfo(BaseModel):
    """Public user information (never carries the password hash)"""

    id: str
    username: str
    full_name: Optional[str] = None
    roles: List[str]
    status: str
    instructor_id: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            username=user.username,
            full_name=user.full_name,
            roles=list(user.roles or []),
            status=user.status.value,
            instructor_id=str(user.instructor_id) if user.instructor_id else None,
        )


class InspectInviteResponse(BaseModel):
    """Who an invite is for"""

    username: str
    expires_at: str
    instructor_name: Optional[str] = None


class AcceptInviteResponse(BaseModel):
    """Response for accept invite use case"""

    token: str
    user: UserInfo
