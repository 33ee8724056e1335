"""
Handle Webhook Use Case

Mirrors processor subscription state onto the local Subscription.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from libs.result import Error, Result, Return
from coursedesk.app.services.billing_gateway import BillingGateway
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.entities import (
    BillingCycle,
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
)

from .dtos import WebhookAck
from .subscriptions import first_price_id, period_bounds

logger = logging.getLogger(__name__)

SUBSCRIPTION_EVENTS = (
    "customer.subscription.created",
    "customer.subscription.updated",
    "customer.subscription.deleted",
)


class HandleWebhookUseCase:
    """
    Use case for processor webhooks.

    Business Rules:
    - The signature must verify against the webhook secret
    - checkout.session.completed: plan and cycle from the session metadata,
      status, ids and period from the processor subscription
    - customer.subscription.*: status, ids and period from the event object
    - The local record is found by customer id; unknown events and
      unknown customers are acknowledged without changes
    """

    def __init__(self, uow: UnitOfWork, gateway: Optional[BillingGateway] = None):
        self.uow = uow
        self.gateway = gateway

    async def execute(self, payload: bytes, signature: Optional[str]) -> Result[WebhookAck]:
        if self.gateway is None or not self.gateway.webhooks_enabled:
            return Return.err(
                Error("BILLING_NOT_CONFIGURED", "Billing webhooks are not configured")
            )

        event = self.gateway.construct_event(payload, signature)
        if event is None:
            return Return.err(Error("INVALID_SIGNATURE", "Invalid webhook signature"))

        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}
        logger.info(f"Billing webhook received: {event_type}")

        async with self.uow:
            if event_type == "checkout.session.completed":
                await self._checkout_completed(obj)
            elif event_type in SUBSCRIPTION_EVENTS:
                await self._subscription_changed(obj)
            await self.uow.commit()

        return Return.ok(WebhookAck())

    async def _checkout_completed(self, session: Dict[str, Any]) -> None:
        customer_id = session.get("customer")
        subscription_id = session.get("subscription")
        metadata = session.get("metadata") or {}

        local = await self._find_local(customer_id)
        if local is None:
            return

        processor_sub: Dict[str, Any] = {}
        if subscription_id:
            processor_sub = self.gateway.retrieve_subscription(subscription_id)

        plan = metadata.get("planId") or metadata.get("plan_id")
        if plan:
            try:
                local.plan_id = SubscriptionPlan(plan)
            except ValueError:
                logger.warning(f"Ignoring unknown plan in checkout metadata: {plan}")
        cycle = metadata.get("cycle")
        if cycle:
            try:
                local.cycle = BillingCycle(cycle)
            except ValueError:
                logger.warning(f"Ignoring unknown cycle in checkout metadata: {cycle}")

        self._mirror(local, processor_sub, subscription_id, default_status="active")
        await self.uow.subscriptions.update(local)

    async def _subscription_changed(self, processor_sub: Dict[str, Any]) -> None:
        local = await self._find_local(processor_sub.get("customer"))
        if local is None:
            return
        self._mirror(local, processor_sub, processor_sub.get("id"))
        await self.uow.subscriptions.update(local)

    async def _find_local(self, customer_id: Optional[str]) -> Optional[Subscription]:
        if not customer_id:
            return None
        local = await self.uow.subscriptions.get_by_customer_id(customer_id)
        if local is None:
            logger.info(f"No local subscription for billing customer {customer_id}")
        return local

    def _mirror(
        self,
        local: Subscription,
        processor_sub: Dict[str, Any],
        subscription_id: Optional[str],
        default_status: Optional[str] = None,
    ) -> None:
        status = processor_sub.get("status") or default_status
        if status:
            try:
                local.status = SubscriptionStatus(status)
            except ValueError:
                logger.warning(f"Ignoring unknown subscription status: {status}")

        start, end = period_bounds(processor_sub)
        local.stripe_subscription_id = subscription_id
        local.stripe_price_id = first_price_id(processor_sub)
        local.current_period_start = start
        local.current_period_end = end
        local.updated_at = datetime.utcnow()
