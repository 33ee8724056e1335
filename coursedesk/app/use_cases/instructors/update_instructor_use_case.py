"""
Update Instructor Use Case

Owner edits or instructor self-service edits.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify, filter_self_update

from .dtos import InstructorResponse

OWNER_EDITABLE_FIELDS = ("name", "email", "bio", "phone", "photo", "skills")


class UpdateInstructorUseCase:
    """
    Use case for updating an instructor profile.

    Business Rules:
    - The owner may change every profile field
    - The linked instructor may change name, bio, phone, photo and skills only
    - owner and user links are never changed here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, instructor_id: UUID, changes: Dict[str, Any]
    ) -> Result[InstructorResponse]:
        async with self.uow:
            instructor = await self.uow.instructors.get_by_id(instructor_id)
            if instructor is None:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            if can_modify(caller, instructor.owner_id):
                allowed = {k: v for k, v in changes.items() if k in OWNER_EDITABLE_FIELDS}
            elif instructor.user_id is not None and instructor.user_id == caller.user_id:
                allowed = filter_self_update(changes)
            else:
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            if "email" in allowed:
                email = (allowed["email"] or "").strip().lower()
                if email != instructor.email:
                    clash = await self.uow.instructors.get_by_owner_and_email(
                        instructor.owner_id, email
                    )
                    if clash and clash.id != instructor.id:
                        return Return.err(
                            Error(
                                "INSTRUCTOR_EMAIL_EXISTS",
                                "An instructor with this email already exists",
                            )
                        )
                allowed["email"] = email

            for field, value in allowed.items():
                if field == "skills":
                    value = list(value or [])
                elif field == "bio":
                    value = value or ""
                setattr(instructor, field, value)

            instructor = await self.uow.instructors.update(instructor)
            await self.uow.commit()

            return Return.ok(InstructorResponse.from_entity(instructor))
