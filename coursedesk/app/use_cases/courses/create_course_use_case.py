"""
Create Course Use Case
"""

import logging

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller
from coursedesk.domain.entities import Course

from .calendar import rebuild_sessions, set_sessions
from .dtos import CourseResponse, CreateCourseCommand

logger = logging.getLogger(__name__)


class CreateCourseUseCase:
    """
    Use case for creating a course.

    Business Rules:
    - The caller becomes the owner
    - end_date must not be before start_date
    - Sessions are generated from the range unless supplied
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, command: CreateCourseCommand
    ) -> Result[CourseResponse]:
        if command.end_date < command.start_date:
            return Return.err(
                Error("INVALID_DATE_RANGE", "end_date must be on or after start_date")
            )

        async with self.uow:
            course = Course(
                title=command.title.strip(),
                description=command.description,
                location=command.location,
                start_date=command.start_date,
                end_date=command.end_date,
                range_start_time=command.range_start_time,
                range_end_time=command.range_end_time,
                days_of_week=list(command.days_of_week),
                instructor_ids=[str(i) for i in command.instructors],
                instructor_rates={str(k): v for k, v in command.instructor_rates.items()},
                cost=command.cost,
                students=command.students,
                materials_cost=command.materials_cost,
                owner_id=caller.user_id,
                enrolled=[str(s) for s in command.enrolled],
                attendance={},
            )

            if command.sessions:
                set_sessions(course, command.sessions)
            else:
                rebuild_sessions(course)

            course = await self.uow.courses.create(course)
            await self.uow.commit()

            logger.info(
                f"Course created: {course.id} owner={caller.user_id} sessions={len(course.sessions)}"
            )
            return Return.ok(CourseResponse.from_entity(course))
