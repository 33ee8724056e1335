"""
Regenerate Sessions Use Case
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify

from .calendar import RANGE_FIELDS, rebuild_sessions, touch
from .dtos import CourseResponse, RegenerateSessionsCommand


class RegenerateSessionsUseCase:
    """
    Use case for rebuilding a course calendar on demand.

    Business Rules:
    - Owner only
    - Range fields in the request override (and are saved on) the course
    - Manual session edits are discarded
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        caller: Caller,
        course_id: UUID,
        command: Optional[RegenerateSessionsCommand] = None,
    ) -> Result[CourseResponse]:
        overrides = command.model_dump(exclude_none=True) if command else {}

        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_modify(caller, course.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            start = overrides.get("start_date", course.start_date)
            end = overrides.get("end_date", course.end_date)
            if end < start:
                return Return.err(
                    Error("INVALID_DATE_RANGE", "end_date must be on or after start_date")
                )

            for field in RANGE_FIELDS:
                if field in overrides:
                    setattr(course, field, overrides[field])

            rebuild_sessions(course)
            touch(course)
            course = await self.uow.courses.update(course)
            await self.uow.commit()

            return Return.ok(CourseResponse.from_entity(course))
