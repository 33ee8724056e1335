"""
Inspect Invite Use Case

Tells the invite landing page who the invite is for.
"""

from datetime import datetime

from libs.result import Error, Result, Return
from coursedesk.app.services.tokens import hash_invite_token
from coursedesk.app.services.unit_of_work import UnitOfWork

from .dtos import InspectInviteResponse


class InspectInviteUseCase:
    """
    Use case for reading an invite without consuming it.

    Business Rules:
    - Unknown token -> INVALID_INVITE
    - Used token -> INVITE_USED, expired token -> INVITE_EXPIRED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, raw_token: str) -> Result[InspectInviteResponse]:
        async with self.uow:
            if not raw_token:
                return Return.err(Error("INVALID_INVITE", "Invalid invite"))

            invite = await self.uow.invite_tokens.get_by_token_hash(
                hash_invite_token(raw_token)
            )
            if invite is None:
                return Return.err(Error("INVALID_INVITE", "Invalid invite"))
            if invite.used_at is not None:
                return Return.err(Error("INVITE_USED", "Invite already used"))
            if invite.expires_at <= datetime.utcnow():
                return Return.err(Error("INVITE_EXPIRED", "Invite expired"))

            user = await self.uow.users.get_by_id(invite.user_id)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "User not found for this invite")
                )

            instructor = await self.uow.instructors.get_by_id(invite.instructor_id)

            return Return.ok(
                InspectInviteResponse(
                    username=user.username,
                    expires_at=invite.expires_at.isoformat(),
                    instructor_name=instructor.name if instructor else None,
                )
            )
