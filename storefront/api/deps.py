"""API dependencies for payment operations."""

from typing import Annotated

from fastapi import Depends, Request

from storefront.core.exceptions import ExternalServiceError
from storefront.services.gateway_service import GatewayService
from storefront.services.payment_context import PaymentContext
from storefront.services.payment_service import PaymentService


def get_payment_context(request: Request) -> PaymentContext:
    """Get the payment context built at startup."""
    context = getattr(request.app.state, "payments", None)
    if context is None:
        raise ExternalServiceError("payments", "payment context is not initialised")
    return context


def get_payment_service(
    context: Annotated[PaymentContext, Depends(get_payment_context)],
) -> PaymentService:
    return context.payment_service


def get_gateway_service(
    context: Annotated[PaymentContext, Depends(get_payment_context)],
) -> GatewayService:
    return context.gateway_service
