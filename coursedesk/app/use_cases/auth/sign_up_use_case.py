"""
Sign Up Use Case

Creates a user account and returns a bearer token.
"""

import logging

from libs.result import Error, Result, Return
from coursedesk.api.utils.jwt import generate_jwt
from coursedesk.app.services.tokens import hash_password
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.entities import User, UserRole, UserStatus

from .dtos import SignUpCommand, TokenResponse

logger = logging.getLogger(__name__)


class SignUpUseCase:
    """
    Use case for self-service sign-up.

    Business Rules:
    - Username is globally unique (case-insensitive)
    - Password stored as bcrypt hash
    - New accounts get role=student, status=active
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignUpCommand) -> Result[TokenResponse]:
        username = command.username.strip().lower()

        async with self.uow:
            existing = await self.uow.users.get_by_username(username)
            if existing:
                return Return.err(Error("USERNAME_TAKEN", "Username already taken"))

            user = User(
                username=username,
                hashed_password=hash_password(command.password),
                roles=[UserRole.student.value],
                status=UserStatus.active,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(f"User signed up: {user.id}")
            return Return.ok(
                TokenResponse(token=generate_jwt(user.id, user.username, user.roles))
            )
