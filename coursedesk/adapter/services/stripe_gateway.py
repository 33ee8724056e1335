"""
Stripe billing gateway

Thin wrapper over the Stripe SDK. Returns plain dicts so use cases never
depend on StripeObject.
"""

import json
import logging
from typing import Any, Dict, Optional

import stripe

from coursedesk.app.services.billing_gateway import BillingGateway

logger = logging.getLogger(__name__)


def _plain(obj: Any) -> Dict[str, Any]:
    return json.loads(str(obj))


class StripeBillingGateway(BillingGateway):
    """Stripe implementation of BillingGateway"""

    def __init__(self, secret_key: str, webhook_secret: str = ""):
        if not secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required")
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    @property
    def webhooks_enabled(self) -> bool:
        return bool(self.webhook_secret)

    def create_customer(self, email: Optional[str], app_user_id: str) -> str:
        customer = stripe.Customer.create(
            api_key=self.secret_key,
            email=email,
            metadata={"appUserId": app_user_id},
        )
        logger.info(f"Created Stripe customer {customer.id} for user {app_user_id}")
        return customer.id

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> str:
        session = stripe.checkout.Session.create(
            api_key=self.secret_key,
            mode="subscription",
            customer=customer_id,
            line_items=[{"price": price_id, "quantity": 1}],
            allow_promotion_codes=True,
            success_url=success_url + "&session_id={CHECKOUT_SESSION_ID}",
            cancel_url=cancel_url,
            metadata=metadata,
        )
        return session.url

    def create_portal_session(self, customer_id: str, return_url: str) -> str:
        portal = stripe.billing_portal.Session.create(
            api_key=self.secret_key,
            customer=customer_id,
            return_url=return_url,
        )
        return portal.url

    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return _plain(
            stripe.Subscription.retrieve(subscription_id, api_key=self.secret_key)
        )

    def construct_event(
        self, payload: bytes, signature: Optional[str]
    ) -> Optional[Dict[str, Any]]:
        if not self.webhook_secret or not signature:
            return None
        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"), signature, self.webhook_secret
            )
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Stripe webhook signature rejected: {e}")
            return None
        try:
            return json.loads(payload)
        except ValueError:
            logger.warning("Stripe webhook payload is not valid JSON")
            return None
