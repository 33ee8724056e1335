"""
Delete Course Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify

logger = logging.getLogger(__name__)


class DeleteCourseUseCase:
    """Owner-only course deletion"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, course_id: UUID) -> Result[None]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_modify(caller, course.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            await self.uow.courses.delete(course)
            await self.uow.commit()

            logger.info(f"Course deleted: {course_id}")
            return Return.ok(None)
