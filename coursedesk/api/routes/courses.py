from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import BaseModel

from coursedesk.api.error import ClientError, ServerError
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.courses import (
    CoursePage,
    CourseResponse,
    CreateCourseCommand,
    CreateCourseUseCase,
    DeleteCourseUseCase,
    EnrollStudentUseCase,
    GetAttendanceUseCase,
    GetCourseUseCase,
    ListCoursesUseCase,
    ListInstructorCoursesUseCase,
    RegenerateSessionsCommand,
    RegenerateSessionsUseCase,
    UnenrollStudentUseCase,
    UpdateAttendanceUseCase,
    UpdateCourseCommand,
    UpdateCourseUseCase,
)
from coursedesk.depends import get_current_user, get_unit_of_work
from coursedesk.domain.access import Caller
from libs.result import Error

router = APIRouter(prefix="/courses", tags=["Courses"])

ERROR_STATUS = {
    "COURSE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_ENROLLED": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "INVALID_DATE_RANGE": status.HTTP_400_BAD_REQUEST,
    "AMBIGUOUS_INSTRUCTOR": status.HTTP_409_CONFLICT,
}


def _raise_error(error: Error):
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    raise ServerError(error)


class EnrollRequest(BaseModel):
    user_id: UUID


@router.get("", status_code=status.HTTP_200_OK, response_model=CoursePage)
async def list_courses(
    q: Optional[str] = Query(None, description="Text filter on title and description"),
    instructor: Optional[str] = Query(None, description='"me" or an instructor id'),
    start_from: Optional[date] = Query(None, alias="from"),
    start_to: Optional[date] = Query(None, alias="to"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    sort: str = Query("-created_at", description="Field name, prefix with - for descending"),
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Courses

    Without an instructor filter admin-class roles see every tenant and
    other callers their own courses. With instructor=me|<id> the listing
    is scoped to the matching instructor's courses.

    Raises:
        - 409 Conflict: instructor=me matches several profiles
    """
    result = await ListCoursesUseCase(uow).execute(
        caller,
        q=q,
        instructor=instructor,
        start_from=start_from,
        start_to=start_to,
        page=page,
        limit=limit,
        sort=sort,
    )
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.get(
    "/instructors/{instructor_id}/courses",
    status_code=status.HTTP_200_OK,
    response_model=CoursePage,
)
async def list_instructor_courses(
    instructor_id: str,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Every course of one instructor, scoped like the listing"""
    result = await ListInstructorCoursesUseCase(uow).execute(caller, instructor_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.get("/{course_id}", status_code=status.HTTP_200_OK, response_model=CourseResponse)
async def get_course(
    course_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Course

    Raises:
        - 403 Forbidden: Not owner, admin, assigned instructor or enrolled
        - 404 Not Found: Unknown course
    """
    result = await GetCourseUseCase(uow).execute(caller, course_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CourseResponse)
async def create_course(
    command: CreateCourseCommand,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Course

    Sessions are generated from the date range, weekdays and daily window
    unless supplied.

    Raises:
        - 400 Bad Request: Invalid input or end_date before start_date
    """
    result = await CreateCourseUseCase(uow).execute(caller, command)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.put("/{course_id}", status_code=status.HTTP_200_OK, response_model=CourseResponse)
@router.patch("/{course_id}", status_code=status.HTTP_200_OK, response_model=CourseResponse)
async def update_course(
    course_id: UUID,
    command: UpdateCourseCommand,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Course

    Sessions are rebuilt when a range field changes or regenerate_sessions
    is set; attendance keeps only surviving sessions.

    Raises:
        - 400 Bad Request: end_date before start_date
        - 403 Forbidden: Caller is not the owner
        - 404 Not Found: Unknown course
    """
    result = await UpdateCourseUseCase(uow).execute(caller, course_id, command)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteCourseUseCase(uow).execute(caller, course_id)
    if result.is_err():
        _raise_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{course_id}/regenerate-sessions",
    status_code=status.HTTP_200_OK,
    response_model=CourseResponse,
)
async def regenerate_sessions(
    course_id: UUID,
    command: Optional[RegenerateSessionsCommand] = Body(None),
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Rebuild the calendar, optionally with new range fields"""
    result = await RegenerateSessionsUseCase(uow).execute(caller, course_id, command)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.get(
    "/{course_id}/attendance",
    status_code=status.HTTP_200_OK,
    response_model=Dict[str, List[str]],
)
async def get_attendance(
    course_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetAttendanceUseCase(uow).execute(caller, course_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.put(
    "/{course_id}/attendance",
    status_code=status.HTTP_200_OK,
    response_model=Dict[str, List[str]],
)
async def update_attendance(
    course_id: UUID,
    body: Any = Body(None),
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Attendance

    Owners send the whole map {instructor_id: [session keys]}. Assigned
    instructors send their own list, or a map holding their own id.

    Raises:
        - 403 Forbidden: Not owner or assigned instructor
        - 404 Not Found: Unknown course
    """
    result = await UpdateAttendanceUseCase(uow).execute(caller, course_id, body)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post(
    "/{course_id}/enrollments",
    status_code=status.HTTP_200_OK,
    response_model=CourseResponse,
)
async def enroll_student(
    course_id: UUID,
    request: EnrollRequest,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await EnrollStudentUseCase(uow).execute(caller, course_id, request.user_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.delete(
    "/{course_id}/enrollments/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=CourseResponse,
)
async def unenroll_student(
    course_id: UUID,
    user_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UnenrollStudentUseCase(uow).execute(caller, course_id, user_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value
