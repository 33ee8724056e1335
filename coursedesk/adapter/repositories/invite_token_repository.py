from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from coursedesk.app.repositories.invite_token_repository import IInviteTokenRepository
from coursedesk.domain.entities import InviteToken


class InviteTokenRepository(IInviteTokenRepository):
    """InviteToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: InviteToken) -> InviteToken:
        """Create a new invite token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[InviteToken]:
        """Get invite token by its SHA-256 hash"""
        stmt = select(InviteToken).where(InviteToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, token: InviteToken) -> InviteToken:
        """Update existing invite token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def delete_siblings(self, instructor_id: UUID, keep_id: UUID) -> int:
        """Delete every token for the instructor except keep_id"""
        stmt = delete(InviteToken).where(
            InviteToken.instructor_id == instructor_id,
            InviteToken.id != keep_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens whose expiry has passed"""
        stmt = delete(InviteToken).where(InviteToken.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
