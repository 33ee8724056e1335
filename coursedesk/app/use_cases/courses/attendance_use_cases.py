"""
Attendance Use Cases

Per-instructor lists of attended session keys on a course.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import (
    ambiguous_instructor_error,
    find_instructor_for_caller,
)
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import (
    Caller,
    ResolutionKind,
    has_admin_power,
    instructor_attendance_update,
    is_assigned_instructor,
    is_owner,
    owner_attendance_update,
)

logger = logging.getLogger(__name__)

AttendanceMap = Dict[str, List[str]]


class GetAttendanceUseCase:
    """Owner, admin-class callers and assigned instructors read the whole map"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, course_id: UUID) -> Result[AttendanceMap]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not (is_owner(course.owner_id, caller) or has_admin_power(caller.roles)):
                resolution = await find_instructor_for_caller(self.uow, caller)
                if resolution.kind == ResolutionKind.ambiguous:
                    return Return.err(ambiguous_instructor_error(caller, resolution))
                if not is_assigned_instructor(course, resolution.instructor):
                    return Return.err(Error("FORBIDDEN", "Forbidden"))

            return Return.ok(
                {
                    str(k): [str(key) for key in v] if isinstance(v, list) else []
                    for k, v in (course.attendance or {}).items()
                }
            )


class UpdateAttendanceUseCase:
    """
    Use case for writing attendance.

    Business Rules:
    - The owner replaces the whole map and gets it back
    - An assigned instructor of the same tenant replaces only their own
      entry and gets that entry back
    - A caller matching several instructor profiles gets AMBIGUOUS_INSTRUCTOR
    - Keys not naming an existing session are dropped, duplicates removed,
      positional idx-N keys stored as the session date
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, course_id: UUID, body: Any) -> Result[AttendanceMap]:
        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if is_owner(course.owner_id, caller):
                course.attendance = owner_attendance_update(course, body)
                await self.uow.courses.update(course)
                await self.uow.commit()
                return Return.ok(dict(course.attendance))

            resolution = await find_instructor_for_caller(self.uow, caller)
            if resolution.kind == ResolutionKind.ambiguous:
                return Return.err(ambiguous_instructor_error(caller, resolution))
            if not is_assigned_instructor(course, resolution.instructor):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            my_id = str(resolution.instructor.id)
            course.attendance = instructor_attendance_update(course, my_id, body)
            await self.uow.courses.update(course)
            await self.uow.commit()

            logger.info(f"Attendance updated by instructor {my_id} on course {course_id}")
            return Return.ok({my_id: course.attendance[my_id]})
