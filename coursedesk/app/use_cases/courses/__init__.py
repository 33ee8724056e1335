"""
Course Use Cases

Course CRUD, session calendars, attendance and enrollment.
"""

from .list_courses_use_case import ListCoursesUseCase
from .list_instructor_courses_use_case import ListInstructorCoursesUseCase
from .get_course_use_case import GetCourseUseCase
from .create_course_use_case import CreateCourseUseCase
from .update_course_use_case import UpdateCourseUseCase
from .delete_course_use_case import DeleteCourseUseCase
from .regenerate_sessions_use_case import RegenerateSessionsUseCase
from .attendance_use_cases import GetAttendanceUseCase, UpdateAttendanceUseCase
from .enrollment_use_cases import EnrollStudentUseCase, UnenrollStudentUseCase
from .dtos import (
    CreateCourseCommand,
    UpdateCourseCommand,
    RegenerateSessionsCommand,
    CourseResponse,
    CoursePage,
)

__all__ = [
    # Use Cases
    "ListCoursesUseCase",
    "ListInstructorCoursesUseCase",
    "GetCourseUseCase",
    "CreateCourseUseCase",
    "UpdateCourseUseCase",
    "DeleteCourseUseCase",
    "RegenerateSessionsUseCase",
    "GetAttendanceUseCase",
    "UpdateAttendanceUseCase",
    "EnrollStudentUseCase",
    "UnenrollStudentUseCase",
    # DTOs - Commands
    "CreateCourseCommand",
    "UpdateCourseCommand",
    "RegenerateSessionsCommand",
    # DTOs - Responses
    "CourseResponse",
    "CoursePage",
]
