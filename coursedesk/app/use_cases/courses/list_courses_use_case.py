"""
List Courses Use Case
"""

from datetime import date
from typing import Optional

from libs.result import Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, course_involves_instructor

from .dtos import CoursePage, CourseResponse
from .scope import resolve_course_scope


class ListCoursesUseCase:
    """
    Use case for the paginated course listing.

    Business Rules:
    - Tenant scoping per resolve_course_scope
    - A course matches an instructor when it lists them or carries a rate for them
    - Text filter on title/description, start_date window, sortable
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        caller: Caller,
        q: Optional[str] = None,
        instructor: Optional[str] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        page: int = 1,
        limit: int = 20,
        sort: str = "-created_at",
    ) -> Result[CoursePage]:
        page = max(1, page)
        limit = max(1, limit)

        async with self.uow:
            scope_result = await resolve_course_scope(self.uow, caller, instructor)
            if scope_result.is_err():
                return scope_result
            scope = scope_result.value

            if scope.empty:
                return Return.ok(CoursePage(page=page, limit=limit, total=0, items=[]))

            courses = await self.uow.courses.list(
                owner_id=scope.owner_id,
                text_query=q,
                start_from=start_from,
                start_to=start_to,
                sort=sort,
            )
            if scope.instructor_id is not None:
                courses = [
                    c for c in courses if course_involves_instructor(c, scope.instructor_id)
                ]

            offset = (page - 1) * limit
            items = [CourseResponse.from_entity(c) for c in courses[offset : offset + limit]]
            return Return.ok(
                CoursePage(page=page, limit=limit, total=len(courses), items=items)
            )
