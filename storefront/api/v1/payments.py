"""Payment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.api.deps import get_gateway_service, get_payment_service
from storefront.schemas.payment import (
    PaymentExecuteRequest,
    PaymentInitiateRequest,
    PaymentInitiationResult,
    PaymentMethodsResponse,
    PaymentResultResponse,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
)
from storefront.services.gateway_service import GatewayService
from storefront.services.payment_service import PaymentService

router = APIRouter()


@router.get("/methods", response_model=PaymentMethodsResponse)
async def list_payment_methods(
    gateway_service: Annotated[GatewayService, Depends(get_gateway_service)],
) -> dict:
    """List payment methods usable at checkout."""
    return {"methods": [method.value for method in gateway_service.configured_methods()]}


@router.post("/initiate", response_model=PaymentInitiationResult)
async def initiate_payment(
    payment_data: PaymentInitiateRequest,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentInitiationResult:
    """Start a payment for an order and return the provider redirect."""
    return await payment_service.initiate_payment(
        order_id=payment_data.order_id,
        method=payment_data.method,
        amount=payment_data.amount,
        customer_info=payment_data.customer_info,
    )


@router.post("/execute", response_model=PaymentResultResponse)
async def execute_payment(
    payment_data: PaymentExecuteRequest,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentResultResponse:
    """Complete a two-phase payment."""
    result = await payment_service.execute_payment(payment_data.payment_id, payment_data.method)
    return PaymentResultResponse.model_validate(result)


@router.post("/verify", response_model=PaymentVerifyResponse)
async def verify_payment(
    payment_data: PaymentVerifyRequest,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentVerifyResponse:
    """Verify a payment reference."""
    verified = await payment_service.verify_payment(payment_data.payment_id, payment_data.method)
    return PaymentVerifyResponse(verified=verified)
