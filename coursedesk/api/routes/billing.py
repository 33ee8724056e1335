from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import BaseModel

from coursedesk.api.error import ClientError, ServerError
from coursedesk.app.services.billing_gateway import BillingGateway
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.app.use_cases.billing import (
    CheckoutResponse,
    CheckoutUseCase,
    GetBillingStatusUseCase,
    HandleWebhookUseCase,
    PortalResponse,
    PortalUseCase,
    SubscriptionResponse,
    WebhookAck,
)
from coursedesk.depends import get_billing_gateway, get_current_user, get_unit_of_work
from coursedesk.domain.access import Caller
from libs.result import Error

router = APIRouter(prefix="/billing", tags=["Billing"])

ERROR_STATUS = {
    "INVALID_PLAN": status.HTTP_400_BAD_REQUEST,
    "INVALID_CYCLE": status.HTTP_400_BAD_REQUEST,
    "NO_BILLING_CUSTOMER": status.HTTP_400_BAD_REQUEST,
    "INVALID_SIGNATURE": status.HTTP_400_BAD_REQUEST,
    "BILLING_NOT_CONFIGURED": status.HTTP_501_NOT_IMPLEMENTED,
}


def _raise_error(error: Error):
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    raise ServerError(error)


class CheckoutRequest(BaseModel):
    plan_id: Optional[str] = "free"
    cycle: Optional[str] = "monthly"


@router.get("/status", status_code=status.HTTP_200_OK, response_model=SubscriptionResponse)
async def billing_status(
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Caller's subscription, created as free on first access"""
    result = await GetBillingStatusUseCase(uow).execute(caller)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post(
    "/checkout",
    status_code=status.HTTP_200_OK,
    response_model=CheckoutResponse,
    response_model_exclude_none=True,
)
async def checkout(
    request: CheckoutRequest,
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: Optional[BillingGateway] = Depends(get_billing_gateway),
):
    """
    Checkout

    free activates at once. Paid plans open a processor checkout, or are
    activated directly (mode "dev") when no processor is configured.

    Raises:
        - 400 Bad Request: Unknown plan or cycle
        - 500 Internal Server Error: No price configured for the plan/cycle
    """
    result = await CheckoutUseCase(uow, gateway).execute(
        caller, request.plan_id, request.cycle
    )
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post("/portal", status_code=status.HTTP_200_OK, response_model=PortalResponse)
async def portal(
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: Optional[BillingGateway] = Depends(get_billing_gateway),
):
    """
    Billing Portal

    Raises:
        - 400 Bad Request: No processor customer yet
        - 501 Not Implemented: No processor configured
    """
    result = await PortalUseCase(uow, gateway).execute(caller)
    if result.is_err():
        _raise_error(result.error)
    return result.value


@router.post("/webhook", status_code=status.HTTP_200_OK, response_model=WebhookAck)
async def webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: Optional[BillingGateway] = Depends(get_billing_gateway),
):
    """
    Processor Webhook

    Reads the raw body for signature verification.

    Raises:
        - 400 Bad Request: Signature does not verify
        - 501 Not Implemented: No processor or webhook secret configured
    """
    payload = await request.body()
    result = await HandleWebhookUseCase(uow, gateway).execute(payload, stripe_signature)
    if result.is_err():
        _raise_error(result.error)
    return result.value
