"""
List Instructor Courses Use Case
"""

from libs.result import Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, course_involves_instructor

from .dtos import CoursePage, CourseResponse
from .scope import resolve_course_scope


class ListInstructorCoursesUseCase:
    """Every course of one instructor, unpaginated, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, instructor_id: str) -> Result[CoursePage]:
        async with self.uow:
            scope_result = await resolve_course_scope(self.uow, caller, instructor_id)
            if scope_result.is_err():
                return scope_result
            scope = scope_result.value

            if scope.empty:
                return Return.ok(CoursePage(page=1, limit=0, total=0, items=[]))

            courses = await self.uow.courses.list(owner_id=scope.owner_id)
            items = [
                CourseResponse.from_entity(c)
                for c in courses
                if course_involves_instructor(c, scope.instructor_id)
            ]
            return Return.ok(
                CoursePage(page=1, limit=len(items), total=len(items), items=items)
            )
