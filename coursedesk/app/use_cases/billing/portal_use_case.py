"""
Billing Portal Use Case
"""

from typing import Optional

from libs.result import Error, Result, Return
from coursedesk.app.services.billing_gateway import BillingGateway
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller

from .dtos import PortalResponse
from .subscriptions import cancel_url, get_or_create_subscription


class PortalUseCase:
    """Opens the processor's self-service portal for the caller's customer"""

    def __init__(self, uow: UnitOfWork, gateway: Optional[BillingGateway] = None):
        self.uow = uow
        self.gateway = gateway

    async def execute(self, caller: Caller) -> Result[PortalResponse]:
        if self.gateway is None:
            return Return.err(
                Error("BILLING_NOT_CONFIGURED", "Billing processor is not configured")
            )

        async with self.uow:
            sub = await get_or_create_subscription(self.uow, caller.user_id)
            await self.uow.commit()

            if not sub.stripe_customer_id:
                return Return.err(
                    Error("NO_BILLING_CUSTOMER", "No billing customer found")
                )

            url = self.gateway.create_portal_session(sub.stripe_customer_id, cancel_url())
            return Return.ok(PortalResponse(url=url))
