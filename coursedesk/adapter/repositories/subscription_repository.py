from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from coursedesk.app.repositories.subscription_repository import ISubscriptionRepository
from coursedesk.domain.entities import Subscription


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_owner(self, owner_id: UUID) -> Optional[Subscription]:
        """Get the owner's subscription"""
        stmt = select(Subscription).where(Subscription.owner_id == owner_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_customer_id(self, customer_id: str) -> Optional[Subscription]:
        """Get subscription by billing processor customer id"""
        stmt = select(Subscription).where(
            Subscription.stripe_customer_id == customer_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
