from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from coursedesk.api.error import ClientError, ServerError
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.auth import (
    AcceptInviteResponse,
    AcceptInviteUseCase,
    InspectInviteResponse,
    InspectInviteUseCase,
    SignInUseCase,
    SignUpCommand,
    SignUpUseCase,
    TokenResponse,
)
from coursedesk.depends import get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignUpRequest(BaseModel):
    """
    Sign-up HTTP request payload

    Validates incoming HTTP request before converting to SignUpCommand.
    """

    username: str = Field(..., min_length=1, max_length=255, description="Login name, usually an email")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


@router.post(
    "/sign-up", status_code=status.HTTP_201_CREATED, response_model=TokenResponse
)
async def sign_up(request: SignUpRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Sign-up

    Creates a student account and returns a bearer token.

    Raises:
        - 400 Bad Request: Invalid input
        - 409 Conflict: Username already taken
        - 500 Internal Server Error: Server error
    """
    command = SignUpCommand(username=request.username, password=request.password)

    use_case = SignUpUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "USERNAME_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class SignInRequest(BaseModel):
    """Sign-in HTTP request payload"""

    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/sign-in", status_code=status.HTTP_200_OK, response_model=TokenResponse)
async def sign_in(request: SignInRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Sign-in

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: User suspended
        - 500 Internal Server Error: Server error
    """
    use_case = SignInUseCase(uow)
    result = await use_case.execute(request.username.strip().lower(), request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_SUSPENDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


def _raise_invite_error(error):
    if error.code in ("INVALID_INVITE", "USER_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("INVITE_USED", "INVITE_EXPIRED"):
        raise ClientError(error, status_code=status.HTTP_410_GONE)
    elif error.code == "INVALID_PASSWORD":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get(
    "/invite/inspect",
    status_code=status.HTTP_200_OK,
    response_model=InspectInviteResponse,
)
async def inspect_invite(
    token: str = Query("", description="Raw invite token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Inspect Invite

    Shows who an invite is for without consuming it.

    Raises:
        - 404 Not Found: Unknown token or missing user
        - 410 Gone: Token already used or expired
    """
    use_case = InspectInviteUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        _raise_invite_error(result.error)

    return result.value


class AcceptInviteRequest(BaseModel):
    """Accept invite HTTP request payload"""

    token: str = Field("", description="Raw invite token")
    password: str = Field("", description="New password (min 8 chars)")


@router.post(
    "/accept-invite",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInviteResponse,
)
async def accept_invite(
    request: AcceptInviteRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Accept Invite

    Sets the invited instructor's password and signs them in.

    Raises:
        - 400 Bad Request: Missing token or password too short
        - 404 Not Found: Unknown token or missing user
        - 410 Gone: Token already used or expired
    """
    use_case = AcceptInviteUseCase(uow)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        _raise_invite_error(result.error)

    return result.value
