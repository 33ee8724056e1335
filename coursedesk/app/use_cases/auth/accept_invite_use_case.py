"""
Accept Invite Use Case

Lets an invited instructor set their password and signs them in.
"""

import logging
from datetime import datetime

from libs.result import Error, Result, Return
from coursedesk.api.utils.jwt import generate_jwt
from coursedesk.app.services.tokens import hash_invite_token, hash_password
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.entities import UserRole, UserStatus

from .dtos import AcceptInviteResponse, UserInfo

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class AcceptInviteUseCase:
    """
    Use case for consuming an invite token.

    Business Rules:
    - Token and password are required; password at least 8 characters
    - Used or expired tokens are rejected
    - Sets the password, status=active, adds the instructor role
    - Marks the token used and deletes sibling tokens for the same instructor
    - Expired tokens are purged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, raw_token: str, password: str) -> Result[AcceptInviteResponse]:
        if not raw_token or not password:
            return Return.err(
                Error("INVALID_PASSWORD", "token and password are required")
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                )
            )

        async with self.uow:
            now = datetime.utcnow()

            invite = await self.uow.invite_tokens.get_by_token_hash(
                hash_invite_token(raw_token)
            )
            if invite is None:
                return Return.err(Error("INVALID_INVITE", "Invalid invite"))
            if invite.used_at is not None:
                return Return.err(Error("INVITE_USED", "Invite already used"))
            if invite.expires_at <= now:
                return Return.err(Error("INVITE_EXPIRED", "Invite expired"))

            user = await self.uow.users.get_by_id(invite.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.hashed_password = hash_password(password)
            user.status = UserStatus.active
            roles = list(user.roles or [])
            if UserRole.instructor.value not in roles:
                roles.append(UserRole.instructor.value)
            user.roles = roles
            user.last_login_at = now
            await self.uow.users.update(user)

            invite.used_at = now
            await self.uow.invite_tokens.update(invite)
            await self.uow.invite_tokens.delete_siblings(invite.instructor_id, invite.id)
            await self.uow.invite_tokens.delete_expired(now)

            await self.uow.commit()

            logger.info(
                f"Invite accepted: user={user.id} instructor={invite.instructor_id}"
            )
            return Return.ok(
                AcceptInviteResponse(
                    token=generate_jwt(user.id, user.username, user.roles),
                    user=UserInfo.from_entity(user),
                )
            )
