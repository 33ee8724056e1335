from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from coursedesk.domain.entities import Subscription


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_by_owner(self, owner_id: UUID) -> Optional[Subscription]:
        """Get the owner's subscription"""
        pass

    @abstractmethod
    async def get_by_customer_id(self, customer_id: str) -> Optional[Subscription]:
        """Get subscription by billing processor customer id"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        pass
