"""
Load Me Use Case

Loads the caller's profile and the instructor it resolves to.
"""

from typing import Any, Dict

from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import find_instructor_for_caller
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.auth.dtos import UserInfo
from coursedesk.domain.access import Caller


class LoadMeUseCase:
    """
    Use case for loading the current user.

    Business Rules:
    - User from the token must still exist
    - instructor_id is the linked instructor, or the unique unlinked
      email match (without linking it)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[Dict[str, Any]]:
        async with self.uow:
            user = await self.uow.users.get_by_id(caller.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            resolution = await find_instructor_for_caller(self.uow, caller)

            info = UserInfo.from_entity(user).model_dump()
            if resolution.found:
                info["instructor_id"] = str(resolution.instructor.id)
            info["created_at"] = user.created_at.isoformat() if user.created_at else None
            info["last_login_at"] = (
                user.last_login_at.isoformat() if user.last_login_at else None
            )
            return Return.ok(info)
