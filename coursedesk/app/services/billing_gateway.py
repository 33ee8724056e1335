from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class BillingGateway(ABC):
    """Payment processor port - checkout, portal and webhook verification"""

    @property
    def webhooks_enabled(self) -> bool:
        """Whether incoming webhooks can be verified"""
        return True

    @abstractmethod
    def create_customer(self, email: Optional[str], app_user_id: str) -> str:
        """Create a processor customer, return its id"""
        pass

    @abstractmethod
    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> str:
        """Create a subscription checkout session, return its URL"""
        pass

    @abstractmethod
    def create_portal_session(self, customer_id: str, return_url: str) -> str:
        """Create a customer portal session, return its URL"""
        pass

    @abstractmethod
    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        """Fetch a processor subscription as a plain dict"""
        pass

    @abstractmethod
    def construct_event(self, payload: bytes, signature: Optional[str]) -> Optional[Dict[str, Any]]:
        """Verify a webhook signature and return the event, or None if invalid"""
        pass
