"""Pydantic schemas for request/response validation."""

from storefront.schemas.payment import (
    CustomerInfo,
    PaymentExecuteRequest,
    PaymentInitiateRequest,
    PaymentInitiationResult,
    PaymentMethodsResponse,
    PaymentResultResponse,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
)

__all__ = [
    "CustomerInfo",
    "PaymentExecuteRequest",
    "PaymentInitiateRequest",
    "PaymentInitiationResult",
    "PaymentMethodsResponse",
    "PaymentResultResponse",
    "PaymentVerifyRequest",
    "PaymentVerifyResponse",
]
