"""
Update Course Use Case

Serves both full (PUT) and partial (PATCH) updates.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify, prune_attendance

from .calendar import RANGE_FIELDS, has_complete_range, rebuild_sessions, set_sessions, touch
from .dtos import CourseResponse, UpdateCourseCommand


class UpdateCourseUseCase:
    """
    Use case for updating a course.

    Business Rules:
    - Owner only
    - end_date must not be before start_date after the merge
    - Sessions are rebuilt when requested, when a range field changes,
      or when the course has none yet and its range is complete
    - Attendance keeps only keys of surviving sessions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, course_id: UUID, command: UpdateCourseCommand
    ) -> Result[CourseResponse]:
        changes: Dict[str, Any] = command.model_dump(exclude_unset=True)
        regenerate = bool(changes.pop("regenerate_sessions", False))
        supplied_sessions = command.sessions if "sessions" in changes else None
        changes.pop("sessions", None)

        async with self.uow:
            course = await self.uow.courses.get_by_id(course_id)
            if course is None:
                return Return.err(Error("COURSE_NOT_FOUND", "Course not found"))

            if not can_modify(caller, course.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            start = changes.get("start_date") or course.start_date
            end = changes.get("end_date") or course.end_date
            if start and end and end < start:
                return Return.err(
                    Error("INVALID_DATE_RANGE", "end_date must be on or after start_date")
                )

            range_changed = any(
                changes.get(field) is not None and changes[field] != getattr(course, field)
                for field in RANGE_FIELDS
            )

            for field, value in changes.items():
                if value is None and field != "description":
                    continue
                if field == "instructors":
                    course.instructor_ids = [str(i) for i in value]
                elif field == "instructor_rates":
                    course.instructor_rates = {str(k): v for k, v in value.items()}
                elif field == "enrolled":
                    course.enrolled = [str(s) for s in value]
                elif field == "days_of_week":
                    course.days_of_week = list(value)
                elif field == "description":
                    course.description = value or ""
                else:
                    setattr(course, field, value)

            if regenerate or range_changed:
                rebuild_sessions(course)
            elif supplied_sessions is not None:
                set_sessions(course, supplied_sessions)
            elif not course.sessions and has_complete_range(course):
                rebuild_sessions(course)
            else:
                course.attendance = prune_attendance(course.attendance, course.sessions)

            touch(course)
            course = await self.uow.courses.update(course)
            await self.uow.commit()

            return Return.ok(CourseResponse.from_entity(course))
