from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from coursedesk.api.error import ClientError, ServerError
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.users import LoadMeUseCase
from coursedesk.depends import get_current_user, get_unit_of_work
from coursedesk.domain.access import Caller

router = APIRouter(tags=["User"])


class MeResponse(BaseModel):
    """GET /me response payload"""

    id: str
    username: str
    full_name: Optional[str] = None
    roles: List[str]
    status: str
    instructor_id: Optional[str] = None
    created_at: Optional[str] = None
    last_login_at: Optional[str] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Returns the caller's profile and the instructor profile it resolves to.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: User no longer exists
    """
    use_case = LoadMeUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
