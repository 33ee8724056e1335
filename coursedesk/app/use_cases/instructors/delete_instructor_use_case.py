"""
Delete Instructor Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify

logger = logging.getLogger(__name__)


class DeleteInstructorUseCase:
    """
    Use case for deleting an instructor.

    Business Rules:
    - Owner only
    - Users pointing at the instructor lose their back-reference
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, instructor_id: UUID) -> Result[None]:
        async with self.uow:
            instructor = await self.uow.instructors.get_by_id(instructor_id)
            if instructor is None:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            if not can_modify(caller, instructor.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            for user in await self.uow.users.list_by_instructor(instructor.id):
                user.instructor_id = None
                await self.uow.users.update(user)

            await self.uow.instructors.delete(instructor)
            await self.uow.commit()

            logger.info(f"Instructor deleted: {instructor_id}")
            return Return.ok(None)
