"""
Instructor Use Case DTOs (Data Transfer Objects)

All Command and Response classes for instructor domain.
"""

from typing import List, Optional
from pydantic import BaseModel

from coursedesk.domain.entities import Instructor


# ============================================================================
# Command DTOs
# ============================================================================


class CreateInstructorCommand(BaseModel):
    """New instructor profile in the caller's tenant"""

    name: str
    email: str
    bio: str = ""
    phone: Optional[str] = None
    photo: Optional[str] = None
    skills: List[str] = []


# ============================================================================
# Response DTOs
# ============================================================================


class InstructorResponse(BaseModel):
    """Instructor profile"""

    id: str
    name: str
    email: str
    bio: str
    phone: Optional[str] = None
    photo: Optional[str] = None
    skills: List[str]
    owner_id: str
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_entity(cls, instructor: Instructor) -> "InstructorResponse":
        return cls(
            id=str(instructor.id),
            name=instructor.name,
            email=instructor.email,
            bio=instructor.bio or "",
            phone=instructor.phone,
            photo=instructor.photo,
            skills=list(instructor.skills or []),
            owner_id=str(instructor.owner_id),
            user_id=str(instructor.user_id) if instructor.user_id else None,
            created_at=instructor.created_at.isoformat()
            if instructor.created_at
            else None,
        )


class CreateInviteResponse(BaseModel):
    """Invite link handed back to the owner"""

    invite_url: str
    expires_at: str
    username: str
