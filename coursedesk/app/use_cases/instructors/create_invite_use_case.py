"""
Create Invite Use Case

Issues a single-use link that lets an instructor set a password.
"""

import logging
import secrets
from datetime import datetime, timedelta
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from coursedesk.app.services.instructor_lookup import link_user_to_instructor
from coursedesk.app.services.tokens import hash_invite_token, hash_password
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, can_modify
from coursedesk.domain.entities import InviteToken, User, UserRole, UserStatus

from .dtos import CreateInviteResponse

logger = logging.getLogger(__name__)


class CreateInviteUseCase:
    """
    Use case for inviting an instructor.

    Business Rules:
    - Owner only; the instructor must have an email
    - The account is the user whose username is the instructor email;
      a new one is created with status=invited and role=instructor
    - The account is linked to the instructor
    - Only the SHA-256 of the token is stored; it expires after INVITE_TTL_HOURS
    - Expired tokens are purged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, instructor_id: UUID) -> Result[CreateInviteResponse]:
        async with self.uow:
            instructor = await self.uow.instructors.get_by_id(instructor_id)
            if instructor is None:
                return Return.err(Error("INSTRUCTOR_NOT_FOUND", "Instructor not found"))

            if not can_modify(caller, instructor.owner_id):
                return Return.err(Error("FORBIDDEN", "Forbidden"))

            username = (instructor.email or "").strip().lower()
            if not username:
                return Return.err(
                    Error("INSTRUCTOR_EMAIL_REQUIRED", "Instructor has no email")
                )

            user = await self.uow.users.get_by_username(username)
            if user is None:
                user = User(
                    username=username,
                    full_name=instructor.name,
                    # Unusable until the invite is accepted
                    hashed_password=hash_password(secrets.token_urlsafe(24)),
                    roles=[UserRole.instructor.value],
                    status=UserStatus.invited,
                )
                user = await self.uow.users.create(user)
                logger.info(f"Invited user created: {user.id}")

            if instructor.user_id is not None and instructor.user_id != user.id:
                return Return.err(
                    Error(
                        "INSTRUCTOR_ALREADY_LINKED",
                        "Instructor is already linked to another user",
                    )
                )
            if user.instructor_id is not None and user.instructor_id != instructor.id:
                return Return.err(
                    Error(
                        "USER_ALREADY_LINKED",
                        "User is already linked to another instructor",
                    )
                )

            await link_user_to_instructor(self.uow, user, instructor)

            now = datetime.utcnow()
            await self.uow.invite_tokens.delete_expired(now)

            raw_token = secrets.token_urlsafe(32)
            expires_at = now + timedelta(hours=ApplicationConfig.INVITE_TTL_HOURS)
            invite = InviteToken(
                token_hash=hash_invite_token(raw_token),
                instructor_id=instructor.id,
                owner_id=caller.user_id,
                user_id=user.id,
                expires_at=expires_at,
            )
            await self.uow.invite_tokens.create(invite)
            await self.uow.commit()

            logger.info(
                f"Invite issued: instructor={instructor.id} user={user.id} expires={expires_at.isoformat()}"
            )
            return Return.ok(
                CreateInviteResponse(
                    invite_url=f"{ApplicationConfig.FRONTEND_BASE_URL}/accept-invite?token={raw_token}",
                    expires_at=expires_at.isoformat(),
                    username=user.username,
                )
            )
