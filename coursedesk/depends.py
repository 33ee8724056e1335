from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from coursedesk.adapter.services.stripe_gateway import StripeBillingGateway
from coursedesk.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from coursedesk.api.error import ClientError
from coursedesk.api.utils.jwt import normalize_token_payload, verify_jwt
from coursedesk.app.services.billing_gateway import BillingGateway
from coursedesk.domain.access import Caller

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def _unauthorized() -> ClientError:
    return ClientError(
        Error("UNAUTHORIZED", "Invalid or expired token"),
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Caller:
    """
    Dependency to extract and verify the bearer token.

    Both historical payload shapes are normalized once here; handlers only
    ever see a Caller.

    Raises:
        ClientError: 401 if the token is missing, invalid, expired or has no identity
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized()

    identity = normalize_token_payload(verify_jwt(credentials.credentials))
    if identity is None:
        raise _unauthorized()

    try:
        user_id = UUID(identity["user_id"])
    except ValueError:
        raise _unauthorized()

    return Caller(
        user_id=user_id,
        username=identity["username"],
        roles=frozenset(identity["roles"]),
    )


def get_billing_gateway() -> Optional[BillingGateway]:
    """Stripe gateway when a secret key is configured, None in dev mode"""
    if not ApplicationConfig.STRIPE_SECRET_KEY:
        return None
    return StripeBillingGateway(
        secret_key=ApplicationConfig.STRIPE_SECRET_KEY,
        webhook_secret=ApplicationConfig.STRIPE_WEBHOOK_SECRET,
    )


async def init_models():
    """Create missing tables on the configured database"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
