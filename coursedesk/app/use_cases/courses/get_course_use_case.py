"""
Get Course Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import (
    ambiguous_instructor_error,
    find_instructor_for_caller,
)
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, ResolutionKind, can_view_course

from .dtos import CourseResponse


class GetCourseUseCase:
    """
    Use case for reading one course.

    Business Rules:
    - Existence is checked before access
    - Owner, admin-class callers, an assigned instructor of the same tenant,
      or an enrolled student may read
    - A caller matching several instructor profiles gets AMBIGUOUS_INSTRUCTOR
      instead of a guess
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, course_id: UUID) -> Result[CourseResponse]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_view_course(caller, course):
                resolution = await find_instructor_for_caller(self.uow, caller)
                if resolution.kind == ResolutionKind.ambiguous:
                    return Return.err(ambiguous_instructor_error(caller, resolution))
                if not can_view_course(caller, course, resolution.instructor):
                    return Return.err(Error("FORBIDDEN", "Forbidden"))

            return Return.ok(CourseResponse.from_entity(course))
