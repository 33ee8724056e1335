from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from coursedesk.domain.entities import InviteToken


class IInviteTokenRepository(ABC):
    """InviteToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: InviteToken) -> InviteToken:
        """Create a new invite token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[InviteToken]:
        """Get invite token by its SHA-256 hash"""
        pass

    @abstractmethod
    async def update(self, token: InviteToken) -> InviteToken:
        """Update existing invite token"""
        pass

    @abstractmethod
    async def delete_siblings(self, instructor_id: UUID, keep_id: UUID) -> int:
        """Delete every token for the instructor except keep_id"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens whose expiry has passed"""
        pass
