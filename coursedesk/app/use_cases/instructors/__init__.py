"""
Instructor Use Cases

Profiles, self-service resolution, linking and invites.
"""

from .list_instructors_use_case import ListInstructorsUseCase
from .get_instructor_use_case import GetInstructorUseCase
from .get_my_instructor_use_case import GetMyInstructorUseCase
from .create_instructor_use_case import CreateInstructorUseCase
from .update_instructor_use_case import UpdateInstructorUseCase
from .delete_instructor_use_case import DeleteInstructorUseCase
from .link_user_use_case import LinkUserUseCase
from .create_invite_use_case import CreateInviteUseCase
from .dtos import CreateInstructorCommand, InstructorResponse, CreateInviteResponse

__all__ = [
    # Use Cases
    "ListInstructorsUseCase",
    "GetInstructorUseCase",
    "GetMyInstructorUseCase",
    "CreateInstructorUseCase",
    "UpdateInstructorUseCase",
    "DeleteInstructorUseCase",
    "LinkUserUseCase",
    "CreateInviteUseCase",
    # DTOs
    "CreateInstructorCommand",
    "InstructorResponse",
    "CreateInviteResponse",
]
