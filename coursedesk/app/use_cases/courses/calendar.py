"""
Session calendar helpers shared by the course use cases.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from coursedesk.domain.access import prune_attendance
from coursedesk.domain.entities import Course
from coursedesk.domain.scheduling import (
    CourseSession,
    generate_sessions,
    session_records,
)

# Changing any of these rebuilds the session list
RANGE_FIELDS = (
    "start_date",
    "end_date",
    "days_of_week",
    "range_start_time",
    "range_end_time",
)


def has_complete_range(course: Course) -> bool:
    return bool(course.start_date and course.end_date and course.days_of_week)


def rebuild_sessions(course: Course) -> None:
    """Replace sessions from the course range and drop attendance for vanished sessions"""
    course.sessions = session_records(
        generate_sessions(
            course.start_date,
            course.end_date,
            course.days_of_week,
            course.range_start_time,
            course.range_end_time,
        )
    )
    course.attendance = prune_attendance(course.attendance, course.sessions)


def set_sessions(course: Course, sessions: Optional[Sequence[CourseSession]]) -> None:
    """Store caller-supplied sessions in date order"""
    ordered: List[CourseSession] = sorted(sessions or [], key=lambda s: s.date)
    course.sessions = session_records(ordered)
    course.attendance = prune_attendance(course.attendance, course.sessions)


def touch(course: Course) -> None:
    course.updated_at = datetime.utcnow()
