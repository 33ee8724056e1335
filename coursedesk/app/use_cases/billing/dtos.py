"""
Billing Use Case DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel

from coursedesk.domain.entities import Subscription


class SubscriptionResponse(BaseModel):
    """The owner's subscription as mirrored locally"""

    id: str
    owner_id: str
    plan_id: str
    cycle: str
    status: str
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_price_id: Optional[str] = None
    current_period_start: Optional[str] = None
    current_period_end: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def from_entity(cls, sub: Subscription) -> "SubscriptionResponse":
        return cls(
            id=str(sub.id),
            owner_id=str(sub.owner_id),
            plan_id=sub.plan_id.value,
            cycle=sub.cycle.value,
            status=sub.status.value,
            stripe_customer_id=sub.stripe_customer_id,
            stripe_subscription_id=sub.stripe_subscription_id,
            stripe_price_id=sub.stripe_price_id,
            current_period_start=sub.current_period_start.isoformat()
            if sub.current_period_start
            else None,
            current_period_end=sub.current_period_end.isoformat()
            if sub.current_period_end
            else None,
            meta=sub.meta,
        )


class CheckoutResponse(BaseModel):
    """Where the browser goes next"""

    url: str
    mode: Optional[str] = None


class PortalResponse(BaseModel):
    url: str


class WebhookAck(BaseModel):
    received: bool = True
