"""
Get My Instructor Use Case

Self-service lookup of the caller's instructor profile.
"""

from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import (
    ambiguous_instructor_error,
    find_instructor_for_caller,
    link_user_to_instructor,
)
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, ResolutionKind

from .dtos import InstructorResponse


class GetMyInstructorUseCase:
    """
    Use case for resolving the caller to an instructor profile.

    Business Rules:
    - A profile linked to the caller wins
    - Otherwise a unique unlinked profile whose email is the caller's
      username is linked to the caller (idempotent)
    - Several such profiles are ambiguous and are never guessed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[InstructorResponse]:
        async with self.uow:
            resolution = await find_instructor_for_caller(self.uow, caller)

            if resolution.kind == ResolutionKind.ambiguous:
                return Return.err(ambiguous_instructor_error(caller, resolution))

            if not resolution.found:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            instructor = resolution.instructor
            if resolution.kind == ResolutionKind.unlinked:
                user = await self.uow.users.get_by_id(caller.user_id)
                if user is not None and user.instructor_id is None:
                    await link_user_to_instructor(self.uow, user, instructor)
                    await self.uow.commit()

            return Return.ok(InstructorResponse.from_entity(instructor))
