"""
Course Use Case DTOs (Data Transfer Objects)

All Command and Response classes for course domain.
"""

from datetime import date
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from coursedesk.domain.entities import Course, CourseLocation
from coursedesk.domain.scheduling import CourseSession, course_financials


# Hourly rate per instructor id
Rate = Annotated[float, Field(allow_inf_nan=False)]


def _check_weekdays(value: Optional[List[int]]) -> Optional[List[int]]:
    if value is None:
        return value
    for day in value:
        if day < 0 or day > 6:
            raise ValueError("days_of_week values must be between 0 (Sunday) and 6 (Saturday)")
    return sorted(set(value))


# ============================================================================
# Command DTOs
# ============================================================================


class CreateCourseCommand(BaseModel):
    """New course; sessions are generated when not supplied"""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    location: CourseLocation
    start_date: date
    end_date: date
    range_start_time: str = Field(default="16:00", pattern=r"^\d{2}:\d{2}$")
    range_end_time: str = Field(default="18:00", pattern=r"^\d{2}:\d{2}$")
    days_of_week: List[int] = []
    sessions: Optional[List[CourseSession]] = None
    instructors: List[str] = []
    instructor_rates: Dict[str, Rate] = {}
    cost: float = Field(default=0, ge=0, allow_inf_nan=False)
    students: int = Field(default=0, ge=0)
    materials_cost: float = Field(default=0, ge=0, allow_inf_nan=False)
    enrolled: List[str] = []

    @field_validator("days_of_week")
    @classmethod
    def check_weekdays(cls, value):
        return _check_weekdays(value)


class UpdateCourseCommand(BaseModel):
    """
    Partial or full course update.

    Only fields present in the request are applied.
    regenerate_sessions forces a rebuild of the calendar.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[CourseLocation] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    range_start_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    range_end_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    days_of_week: Optional[List[int]] = None
    sessions: Optional[List[CourseSession]] = None
    instructors: Optional[List[str]] = None
    instructor_rates: Optional[Dict[str, Rate]] = None
    cost: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    students: Optional[int] = Field(default=None, ge=0)
    materials_cost: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    enrolled: Optional[List[str]] = None
    regenerate_sessions: bool = False

    @field_validator("days_of_week")
    @classmethod
    def check_weekdays(cls, value):
        return _check_weekdays(value)


class RegenerateSessionsCommand(BaseModel):
    """Optional overrides for the range used to rebuild sessions"""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_of_week: Optional[List[int]] = None
    range_start_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    range_end_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")

    @field_validator("days_of_week")
    @classmethod
    def check_weekdays(cls, value):
        return _check_weekdays(value)


# ============================================================================
# Response DTOs
# ============================================================================


class CourseResponse(BaseModel):
    """Course with its computed financial fields"""

    id: str
    title: str
    description: str
    location: str
    start_date: str
    end_date: str
    range_start_time: str
    range_end_time: str
    days_of_week: List[int]
    sessions: List[Dict[str, str]]
    instructors: List[str]
    instructor_rates: Dict[str, float]
    cost: float
    students: int
    materials_cost: float
    owner_id: str
    enrolled: List[str]
    attendance: Dict[str, List[str]]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    # Computed on read
    total_sessions: int
    total_hours: float
    revenue: float
    instructor_expense: float
    profit: float

    @classmethod
    def from_entity(cls, course: Course) -> "CourseResponse":
        financials = course_financials(
            course.sessions,
            course.cost,
            course.students,
            course.instructor_rates,
            course.materials_cost,
        )
        return cls(
            id=str(course.id),
            title=course.title,
            description=course.description or "",
            location=course.location.value
            if isinstance(course.location, CourseLocation)
            else str(course.location),
            start_date=course.start_date.isoformat(),
            end_date=course.end_date.isoformat(),
            range_start_time=course.range_start_time,
            range_end_time=course.range_end_time,
            days_of_week=list(course.days_of_week or []),
            sessions=list(course.sessions or []),
            instructors=list(course.instructor_ids or []),
            instructor_rates=dict(course.instructor_rates or {}),
            cost=course.cost,
            students=course.students,
            materials_cost=course.materials_cost,
            owner_id=str(course.owner_id),
            enrolled=list(course.enrolled or []),
            attendance={k: list(v) for k, v in (course.attendance or {}).items()},
            created_at=course.created_at.isoformat() if course.created_at else None,
            updated_at=course.updated_at.isoformat() if course.updated_at else None,
            **financials,
        )


class CoursePage(BaseModel):
    """One page of courses"""

    page: int
    limit: int
    total: int
    items: List[CourseResponse]
