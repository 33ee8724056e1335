"""
List Instructors Use Case
"""

from typing import List, Optional

from libs.result import Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, has_admin_power

from .dtos import InstructorResponse


class ListInstructorsUseCase:
    """
    Use case for listing instructors.

    Business Rules:
    - Admin-class callers see every tenant, others their own
    - Optional case-insensitive name filter, newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, name_query: Optional[str] = None
    ) -> Result[List[InstructorResponse]]:
        async with self.uow:
            owner_id = None if has_admin_power(caller.roles) else caller.user_id
            instructors = await self.uow.instructors.list(
                owner_id=owner_id, name_query=name_query
            )
            return Return.ok([InstructorResponse.from_entity(i) for i in instructors])
