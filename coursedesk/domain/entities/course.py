"""
Course Entity

Course definition with its generated session calendar.
"""

from datetime import date, datetime
from typing import Dict, List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from .enums import CourseLocation


class Course(SQLModel, table=True):
    """
    Course entity - a recurring course and its sessions.

    Business Rules:
    - end_date must be on or after start_date
    - days_of_week holds integers 0 (Sunday) .. 6 (Saturday)
    - sessions is derived from the date range, weekdays and daily window,
      stored as [{"date": "YYYY-MM-DD", "start_time": "HH:MM", "end_time": "HH:MM"}]
    - instructor_rates maps instructor id -> hourly rate
    - attendance maps instructor id -> list of session date keys
    - Financial totals are computed on read, never stored
    """

    __tablename__ = "courses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    title: str = Field(max_length=255)
    description: str
    location: CourseLocation = Field(nullable=False)

    # Date range + frequency
    start_date: date = Field(nullable=False)
    end_date: date = Field(nullable=False)
    range_start_time: str = Field(default="16:00", max_length=5)
    range_end_time: str = Field(default="18:00", max_length=5)
    days_of_week: List[int] = Field(default_factory=list, sa_column=Column(JSON))

    sessions: List[Dict[str, str]] = Field(default_factory=list, sa_column=Column(JSON))

    # Instructors
    instructor_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    instructor_rates: Dict[str, float] = Field(
        default_factory=dict, sa_column=Column(JSON)
    )

    # Financials
    cost: float = Field(default=0)
    students: int = Field(default=0)
    materials_cost: float = Field(default=0)

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    enrolled: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    attendance: Dict[str, List[str]] = Field(
        default_factory=dict, sa_column=Column(JSON)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_course_date_range", "start_date", "end_date"),)
