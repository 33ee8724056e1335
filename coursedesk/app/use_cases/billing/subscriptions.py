"""
Shared subscription helpers for the billing use cases.
"""

import calendar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from config import ApplicationConfig
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.entities import (
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
)


async def get_or_create_subscription(uow: UnitOfWork, owner_id: UUID) -> Subscription:
    """The owner's subscription; a free/active one is created on first access"""
    sub = await uow.subscriptions.get_by_owner(owner_id)
    if sub is None:
        sub = await uow.subscriptions.create(
            Subscription(
                owner_id=owner_id,
                plan_id=SubscriptionPlan.free,
                status=SubscriptionStatus.active,
            )
        )
    return sub


def add_months(moment: datetime, months: int) -> datetime:
    """Same day-of-month n months later, clamped to the month's last day"""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def success_url(plan_id: str, cycle: Optional[str]) -> str:
    return (
        f"{ApplicationConfig.FRONTEND_BASE_URL}/subscriptions/success"
        f"?plan={plan_id}&cycle={cycle or 'monthly'}"
    )


def cancel_url() -> str:
    return f"{ApplicationConfig.FRONTEND_BASE_URL}/subscriptions"


def price_id_for(plan_id: str, cycle: str) -> str:
    return ((ApplicationConfig.STRIPE_PRICE_MAP or {}).get(plan_id) or {}).get(cycle) or ""


def from_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(int(value), timezone.utc).replace(tzinfo=None)
    except (TypeError, ValueError, OverflowError):
        return None


def _first_item(processor_sub: Dict[str, Any]) -> Dict[str, Any]:
    items = (processor_sub.get("items") or {}).get("data") or []
    return items[0] if items else {}


def period_bounds(
    processor_sub: Dict[str, Any]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Period from the subscription, falling back to its first item"""
    item = _first_item(processor_sub)
    start = processor_sub.get("current_period_start") or item.get("current_period_start")
    end = processor_sub.get("current_period_end") or item.get("current_period_end")
    return from_timestamp(start), from_timestamp(end)


def first_price_id(processor_sub: Dict[str, Any]) -> Optional[str]:
    return (_first_item(processor_sub).get("price") or {}).get("id")
