"""
Subscription Entity

Per-owner billing plan mirrored from the payment processor.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from .enums import BillingCycle, SubscriptionPlan, SubscriptionStatus


class Subscription(SQLModel, table=True):
    """
    Subscription entity - one per owner.

    Business Rules:
    - Created lazily as free/active on first status lookup
    - Processor fields are written by checkout and webhook handling
    - current_period_end is None for the unlimited free plan
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    owner_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    plan_id: SubscriptionPlan = Field(default=SubscriptionPlan.free)
    cycle: BillingCycle = Field(default=BillingCycle.monthly)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.active)

    # Processor linkage
    stripe_customer_id: Optional[str] = Field(default=None, index=True, max_length=255)
    stripe_subscription_id: Optional[str] = Field(
        default=None, index=True, max_length=255
    )
    stripe_price_id: Optional[str] = Field(default=None, max_length=255)

    current_period_start: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    current_period_end: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    meta: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
