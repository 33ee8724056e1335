"""
Link User Use Case

Explicitly binds a user account to an instructor profile.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import link_user_to_instructor
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify

from .dtos import InstructorResponse


class LinkUserUseCase:
    """
    Use case for the owner's link action.

    Business Rules:
    - Owner only
    - A user links to at most one instructor, an instructor to at most one user
    - Relinking the same pair is a no-op
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, instructor_id: UUID, user_id: UUID
    ) -> Result[InstructorResponse]:
        async with self.uow:
            instructor = await self.uow.instructors.get_by_id(instructor_id)
            if instructor is None:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            if not can_modify(caller, instructor.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if instructor.user_id is not None and instructor.user_id != user.id:
                return Return.err(
                    Error(
                        "INSTRUCTOR_ALREADY_LINKED",
                        "Instructor is already linked to another user",
                    )
                )

            other = [
                i
                for i in await self.uow.instructors.get_linked_to_user(user.id)
                if i.id != instructor.id
            ]
            if other or (
                user.instructor_id is not None and user.instructor_id != instructor.id
            ):
                return Return.err(
                    Error(
                        "USER_ALREADY_LINKED",
                        "User is already linked to another instructor",
                    )
                )

            await link_user_to_instructor(self.uow, user, instructor)
            await self.uow.commit()

            return Return.ok(InstructorResponse.from_entity(instructor))
