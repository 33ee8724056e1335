"""
Create Instructor Use Case
"""

import logging

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller
from coursedesk.domain.entities import Instructor

from .dtos import CreateInstructorCommand, InstructorResponse

logger = logging.getLogger(__name__)


class CreateInstructorUseCase:
    """
    Use case for adding an instructor to the caller's tenant.

    Business Rules:
    - The caller becomes the owner
    - Email is stored trimmed and lowercased, unique per owner
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, command: CreateInstructorCommand
    ) -> Result[InstructorResponse]:
        email = command.email.strip().lower()

        async with self.uow:
            existing = await self.uow.instructors.get_by_owner_and_email(
                caller.user_id, email
            )
            if existing:
                return Return.err(
                    Error(
                        "INSTRUCTOR_EMAIL_EXISTS",
                        "An instructor with this email already exists",
                    )
                )

            instructor = Instructor(
                name=command.name.strip(),
                email=email,
                bio=command.bio or "",
                phone=command.phone,
                photo=command.photo,
                skills=list(command.skills or []),
                owner_id=caller.user_id,
            )
            instructor = await self.uow.instructors.create(instructor)
            await self.uow.commit()

            logger.info(f"Instructor created: {instructor.id} owner={caller.user_id}")
            return Return.ok(InstructorResponse.from_entity(instructor))
