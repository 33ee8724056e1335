"""
Get Instructor Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_view_instructor

from .dtos import InstructorResponse


class GetInstructorUseCase:
    """Admin-class callers, the owner, or the linked instructor may read a profile"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, instructor_id: UUID) -> Result[InstructorResponse]:
        async with self.uow:
            instructor = await self.uow.instructors.get_by_id(instructor_id)
            if instructor is None:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            if not can_view_instructor(caller, instructor):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            return Return.ok(InstructorResponse.from_entity(instructor))
