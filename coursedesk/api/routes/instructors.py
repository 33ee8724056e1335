from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from coursedesk.api.error import ClientError, ServerError
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.instructors import (
    CreateInstructorCommand,
    CreateInstructorUseCase,
    CreateInviteResponse,
    CreateInviteUseCase,
    DeleteInstructorUseCase,
    GetInstructorUseCase,
    GetMyInstructorUseCase,
    InstructorResponse,
    LinkUserUseCase,
    ListInstructorsUseCase,
    UpdateInstructorUseCase,
)
from coursedesk.depends import get_current_user, get_unit_of_work
from coursedesk.domain.access import Caller
from libs.result import Error

router = APIRouter(prefix="/instructors", tags=["Instructors"])

ERROR_STATUS = {
    "INSTRUCTOR_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "INSTRUCTOR_EMAIL_EXISTS": status.HTTP_409_CONFLICT,
    "INSTRUCTOR_EMAIL_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "AMBIGUOUS_INSTRUCTOR": status.HTTP_409_CONFLICT,
    "USER_ALREADY_LINKED": status.HTTP_409_CONFLICT,
    "INSTRUCTOR_ALREADY_LINKED": status.HTTP_409_CONFLICT,
}


def _raise_error(error: Error):
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    raise ServerError(error)


class InstructorCreateRequest(BaseModel):
    """Create instructor HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    bio: str = ""
    phone: Optional[str] = Field(default=None, max_length=64)
    photo: Optional[str] = Field(default=None, max_length=1024)
    skills: List[str] = []


class InstructorUpdateRequest(BaseModel):
    """
    Update instructor HTTP request payload

    Fields left out are not touched. Which of them apply depends on the caller.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    bio: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=64)
    photo: Optional[str] = Field(default=None, max_length=1024)
    skills: Optional[List[str]] = None


class LinkUserRequest(BaseModel):
    user_id: UUID


@router.get("", status_code=status.HTTP_200_OK, response_model=List[InstructorResponse])
async def list_instructors(
    q: Optional[str] = Query(None, description="Case-insensitive name filter"),
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Instructors

    Admin-class roles see every tenant, other callers their own instructors.
    """
    result = await ListInstructorsUseCase(uow).execute(caller, q)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=InstructorResponse)
async def get_my_instructor(
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    My Instructor Profile

    Resolves the caller to an instructor, linking a unique email match.

    Raises:
        - 404 Not Found: No matching profile
        - 409 Conflict: Several profiles match; an owner must link one
    """
    result = await GetMyInstructorUseCase(uow).execute(caller)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.get(
    "/{instructor_id}", status_code=status.HTTP_200_OK, response_model=InstructorResponse
)
async def get_instructor(
    instructor_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetInstructorUseCase(uow).execute(caller, instructor_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InstructorResponse)
async def create_instructor(
    request: InstructorCreateRequest,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Instructor

    The caller becomes the owner.

    Raises:
        - 409 Conflict: The caller already has an instructor with this email
    """
    command = CreateInstructorCommand(**request.model_dump())
    result = await CreateInstructorUseCase(uow).execute(caller, command)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.patch(
    "/{instructor_id}", status_code=status.HTTP_200_OK, response_model=InstructorResponse
)
async def update_instructor(
    instructor_id: UUID,
    request: InstructorUpdateRequest,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Instructor

    Owners may edit every profile field; the linked instructor only
    name, bio, phone, photo and skills.

    Raises:
        - 403 Forbidden: Neither owner nor linked instructor
        - 404 Not Found: Unknown instructor
    """
    changes = request.model_dump(exclude_unset=True)
    result = await UpdateInstructorUseCase(uow).execute(caller, instructor_id, changes)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.delete("/{instructor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_instructor(
    instructor_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteInstructorUseCase(uow).execute(caller, instructor_id)
    if result.is_err():
        _raise_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{instructor_id}/link",
    status_code=status.HTTP_200_OK,
    response_model=InstructorResponse,
)
async def link_user(
    instructor_id: UUID,
    request: LinkUserRequest,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Link User to Instructor

    Raises:
        - 403 Forbidden: Caller is not the owner
        - 404 Not Found: Unknown instructor or user
        - 409 Conflict: Either side already linked elsewhere
    """
    result = await LinkUserUseCase(uow).execute(caller, instructor_id, request.user_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post(
    "/{instructor_id}/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInviteResponse,
)
async def create_invite(
    instructor_id: UUID,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite Instructor

    Returns a single-use link for the instructor to set a password.

    Raises:
        - 403 Forbidden: Caller is not the owner
        - 404 Not Found: Unknown instructor
        - 409 Conflict: Account already linked to another instructor
    """
    result = await CreateInviteUseCase(uow).execute(caller, instructor_id)
    if result.is_err():
        _raise_error(result.error)
    return result.value
