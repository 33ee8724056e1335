"""
Enrollment Use Cases

Owner-managed list of enrolled student user ids.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify

from .calendar import touch
from .dtos import CourseResponse


class EnrollStudentUseCase:
    """Adds a user to course.enrolled; enrolling twice is a no-op"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, course_id: UUID, user_id: UUID
    ) -> Result[CourseResponse]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_modify(caller, course.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            enrolled = [str(s) for s in course.enrolled or []]
            if str(user.id) not in enrolled:
                course.enrolled = enrolled + [str(user.id)]
                touch(course)
                course = await self.uow.courses.update(course)
                await self.uow.commit()

            return Return.ok(CourseResponse.from_entity(course))


class UnenrollStudentUseCase:
    """Removes a user from course.enrolled"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, course_id: UUID, user_id: UUID
    ) -> Result[CourseResponse]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_modify(caller, course.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            enrolled = [str(s) for s in course.enrolled or []]
            if str(user_id) not in enrolled:
                return Return.err(
                    Error("NOT_ENROLLED", "User is not enrolled in this course")
                )

            course.enrolled = [s for s in enrolled if s != str(user_id)]
            touch(course)
            course = await self.uow.courses.update(course)
            await self.uow.commit()

            return Return.ok(CourseResponse.from_entity(course))
