"""
Get Billing Status Use Case
"""

from libs.result import Result, Return
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller

from .dtos import SubscriptionResponse
from .subscriptions import get_or_create_subscription


class GetBillingStatusUseCase:
    """Caller's subscription, created as free/active on first access"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[SubscriptionResponse]:
        async with self.uow:
            sub = await get_or_create_subscription(self.uow, caller.user_id)
            await self.uow.commit()
            return Return.ok(SubscriptionResponse.from_entity(sub))
