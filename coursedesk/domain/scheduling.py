"""
Course calendar and financial calculations.

Pure functions over plain values: no I/O, no shared state.
"""

import datetime as dt
import logging
import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "16:00"
DEFAULT_END_TIME = "18:00"

DateLike = Union[date, datetime, str, None]


class CourseSession(BaseModel):
    """A single calendar session owned by a course"""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    start_time: str
    end_time: str

    def to_record(self) -> Dict[str, str]:
        return {
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


def parse_date(value: DateLike) -> Optional[date]:
    """Normalize a date, datetime or ISO string to a bare date, None if unparseable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def sunday_weekday(day: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday"""
    return (day.weekday() + 1) % 7


def generate_sessions(
    start_date: DateLike,
    end_date: DateLike,
    weekdays: Optional[Iterable[int]],
    daily_start: Optional[str] = None,
    daily_end: Optional[str] = None,
) -> List[CourseSession]:
    """
    Enumerate the sessions of a weekly recurring course.

    Every day from start_date to end_date (inclusive) whose weekday is in
    ``weekdays`` yields one session with the same daily window. Missing or
    unparseable dates, an empty weekday set, or an inverted range yield [].
    """
    days = set(weekdays or [])
    if not days:
        return []

    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        logger.debug("Unparseable session range: %r - %r", start_date, end_date)
        return []
    if start > end:
        return []

    start_time = daily_start or DEFAULT_START_TIME
    end_time = daily_end or DEFAULT_END_TIME

    sessions = []
    day = start
    while day <= end:
        if sunday_weekday(day) in days:
            sessions.append(
                CourseSession(date=day, start_time=start_time, end_time=end_time)
            )
        day += timedelta(days=1)
    return sessions


def session_records(sessions: Sequence[CourseSession]) -> List[Dict[str, str]]:
    return [s.to_record() for s in sessions]


def hhmm_to_minutes(value: Any) -> int:
    """Minutes since midnight for "HH:MM", 0 when malformed"""
    if not value or not isinstance(value, str):
        return 0
    parts = value.split(":")
    if len(parts) < 2:
        return 0
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes


def session_hours(start_time: Any, end_time: Any) -> float:
    start = hhmm_to_minutes(start_time)
    end = hhmm_to_minutes(end_time)
    if end < start:
        end += 24 * 60  # crosses midnight
    return (end - start) / 60


def _finite(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return 0.0


def total_hours(sessions: Optional[Sequence[Mapping[str, Any]]]) -> float:
    if not sessions:
        return 0.0
    return sum(session_hours(s.get("start_time"), s.get("end_time")) for s in sessions)


def course_financials(
    sessions: Optional[Sequence[Mapping[str, Any]]],
    cost: Any,
    students: Any,
    instructor_rates: Optional[Mapping[str, Any]],
    materials_cost: Any,
) -> Dict[str, float]:
    """Derived totals for a course: sessions, hours, revenue, expense, profit"""
    hours = total_hours(sessions)
    revenue = _finite(cost) * _finite(students)
    rate_sum = sum(_finite(rate) for rate in (instructor_rates or {}).values())
    instructor_expense = rate_sum * hours
    profit = revenue - instructor_expense - _finite(materials_cost)
    return {
        "total_sessions": len(sessions or []),
        "total_hours": hours,
        "revenue": revenue,
        "instructor_expense": instructor_expense,
        "profit": profit,
    }
