"""
Billing Use Cases

Subscription status, checkout, portal and processor webhooks.
"""

from .get_billing_status_use_case import GetBillingStatusUseCase
from .checkout_use_case import CheckoutUseCase
from .portal_use_case import PortalUseCase
from .handle_webhook_use_case import HandleWebhookUseCase
from .dtos import SubscriptionResponse, CheckoutResponse, PortalResponse, WebhookAck

__all__ = [
    # Use Cases
    "GetBillingStatusUseCase",
    "CheckoutUseCase",
    "PortalUseCase",
    "HandleWebhookUseCase",
    # DTOs
    "SubscriptionResponse",
    "CheckoutResponse",
    "PortalResponse",
    "WebhookAck",
]
