"""
Sign In Use Case

Authenticates a user by username and password.
"""

from datetime import datetime

from libs.result import Error, Result, Return
from coursedesk.api.utils.jwt import generate_jwt
from coursedesk.app.services.tokens import check_password, hash_password
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.entities import UserStatus

from .dtos import TokenResponse


class SignInUseCase:
    """
    Use case for sign-in and token issuance.

    Business Rules:
    - Unknown username and wrong password produce the same error
    - Invited users have not set a password yet and cannot sign in
    - Suspended users are rejected
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, username: str, password: str) -> Result[TokenResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_username(username)

            if user is None:
                # Hash a dummy password to keep timing uniform
                hash_password("dummy_password")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid credentials")
                )

            if not check_password(password, user.hashed_password):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid credentials")
                )

            if user.status == UserStatus.invited:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid credentials")
                )

            if user.status == UserStatus.suspended:
                return Return.err(Error("USER_SUSPENDED", "User account is suspended"))

            user.last_login_at = datetime.utcnow()
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(
                TokenResponse(token=generate_jwt(user.id, user.username, user.roles))
            )
