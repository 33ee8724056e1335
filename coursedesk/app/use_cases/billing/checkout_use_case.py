"""
Checkout Use Case

Moves the caller's subscription to a plan.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from coursedesk.app.services.billing_gateway import BillingGateway
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller
from coursedesk.domain.entities import BillingCycle, SubscriptionPlan, SubscriptionStatus

from .dtos import CheckoutResponse
from .subscriptions import (
    add_months,
    cancel_url,
    get_or_create_subscription,
    price_id_for,
    success_url,
)

logger = logging.getLogger(__name__)


class CheckoutUseCase:
    """
    Use case for plan checkout.

    Business Rules:
    - free: activated immediately, no period end
    - paid without a processor: activated immediately for 1 or 12 months (dev mode)
    - paid with a processor: customer created once and reused, a
      subscription checkout session is opened and its URL returned
    """

    def __init__(self, uow: UnitOfWork, gateway: Optional[BillingGateway] = None):
        self.uow = uow
        self.gateway = gateway

    async def execute(
        self, caller: Caller, plan_id: Optional[str], cycle: Optional[str]
    ) -> Result[CheckoutResponse]:
        plan_value = str(plan_id or SubscriptionPlan.free.value)
        cycle_value = str(cycle or BillingCycle.monthly.value)

        try:
            plan = SubscriptionPlan(plan_value)
        except ValueError:
            return Return.err(Error("INVALID_PLAN", f"Invalid plan: {plan_value}"))

        billing_cycle = BillingCycle.monthly
        if plan != SubscriptionPlan.free:
            try:
                billing_cycle = BillingCycle(cycle_value)
            except ValueError:
                return Return.err(Error("INVALID_CYCLE", f"Invalid cycle: {cycle_value}"))

        async with self.uow:
            sub = await get_or_create_subscription(self.uow, caller.user_id)
            now = datetime.utcnow()

            if plan == SubscriptionPlan.free:
                sub.plan_id = SubscriptionPlan.free
                sub.cycle = BillingCycle.monthly
                sub.status = SubscriptionStatus.active
                sub.stripe_subscription_id = None
                sub.stripe_price_id = None
                sub.current_period_start = now
                sub.current_period_end = None
                sub.updated_at = now
                await self.uow.subscriptions.update(sub)
                await self.uow.commit()
                return Return.ok(CheckoutResponse(url=success_url(plan.value, "monthly")))

            if self.gateway is None:
                months = 12 if billing_cycle == BillingCycle.annual else 1
                sub.plan_id = plan
                sub.cycle = billing_cycle
                sub.status = SubscriptionStatus.active
                sub.stripe_subscription_id = None
                sub.stripe_price_id = None
                sub.current_period_start = now
                sub.current_period_end = add_months(now, months)
                sub.updated_at = now
                await self.uow.subscriptions.update(sub)
                await self.uow.commit()
                logger.info(
                    f"Dev-mode activation: owner={caller.user_id} plan={plan.value} cycle={billing_cycle.value}"
                )
                return Return.ok(
                    CheckoutResponse(
                        url=success_url(plan.value, billing_cycle.value), mode="dev"
                    )
                )

            price_id = price_id_for(plan.value, billing_cycle.value)
            if not price_id:
                return Return.err(
                    Error(
                        "PRICE_NOT_CONFIGURED",
                        "Price not configured for this plan/cycle",
                    )
                )

            if not sub.stripe_customer_id:
                user = await self.uow.users.get_by_id(caller.user_id)
                email = (user.username if user else caller.username) or None
                sub.stripe_customer_id = self.gateway.create_customer(
                    email, str(caller.user_id)
                )
                sub.updated_at = now
                await self.uow.subscriptions.update(sub)
                await self.uow.commit()

            url = self.gateway.create_checkout_session(
                customer_id=sub.stripe_customer_id,
                price_id=price_id,
                success_url=success_url(plan.value, billing_cycle.value),
                cancel_url=cancel_url(),
                metadata={
                    "appUserId": str(caller.user_id),
                    "planId": plan.value,
                    "cycle": billing_cycle.value,
                },
            )
            return Return.ok(CheckoutResponse(url=url))
