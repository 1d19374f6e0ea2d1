"""Checkout-facing payment service.

Stable entry point for the checkout UI. Translates the display labels the
frontend uses into payment methods, fills in guest details when no customer
profile is supplied, and shapes gateway results into initiation results.
"""

import logging
import math

from storefront.gateways.base import PaymentMethod, PaymentRequest, PaymentResponse
from storefront.schemas.payment import CustomerInfo, PaymentInitiationResult
from storefront.services.gateway_service import GatewayService

logger = logging.getLogger(__name__)

# Display labels (lowercased) accepted from checkout, mapped to methods
METHOD_LABELS: dict[str, PaymentMethod] = {
    "bkash": PaymentMethod.BKASH,
    "nagad": PaymentMethod.NAGAD,
    "sslcommerz": PaymentMethod.CARD,
    "card": PaymentMethod.CARD,
    "bank card": PaymentMethod.CARD,
    "wallet": PaymentMethod.WALLET,
    "store credit": PaymentMethod.WALLET,
    "cod": PaymentMethod.COD,
    "cash on delivery": PaymentMethod.COD,
}

GUEST_CUSTOMER = CustomerInfo(
    name="Guest",
    email="guest@example.com",
    phone="01700000000",
    address="Dhaka",
)


def resolve_method(label: str | None) -> PaymentMethod | None:
    """Map a checkout display label to a payment method, or None if unknown."""
    if not label:
        return None
    return METHOD_LABELS.get(label.strip().lower())


class PaymentService:
    """Facade over the gateway service."""

    def __init__(self, gateway_service: GatewayService):
        self.gateway_service = gateway_service

    async def initiate_payment(
        self,
        order_id: str,
        method: str,
        amount: float,
        customer_info: CustomerInfo | None = None,
    ) -> PaymentInitiationResult:
        """Initiate a payment using the unified gateway."""
        payment_method = resolve_method(method)
        if payment_method is None:
            logger.warning(f"Unknown payment method label '{method}' for order {order_id}")
            return PaymentInitiationResult(success=False, error="Unsupported payment method")

        if not order_id or not order_id.strip():
            return PaymentInitiationResult(success=False, error="Order id is required")

        if amount is None or not math.isfinite(amount) or amount <= 0:
            return PaymentInitiationResult(success=False, error="Amount must be a positive number")

        info = customer_info or GUEST_CUSTOMER

        response: PaymentResponse = await self.gateway_service.process_payment(
            payment_method,
            PaymentRequest(
                amount=amount,
                order_id=order_id,
                customer_name=info.name,
                customer_email=info.email,
                customer_phone=info.phone,
                customer_address=info.address,
            ),
        )

        if response.success:
            return PaymentInitiationResult(
                success=True,
                payment_id=response.transaction_id,
                payment_url=response.payment_url,
                message=response.message,
            )

        return PaymentInitiationResult(
            success=False,
            error=response.error or "Payment Failed",
        )

    async def execute_payment(self, payment_id: str, method: str) -> PaymentResponse:
        """Complete a two-phase payment after the provider redirect."""
        payment_method = resolve_method(method)
        if payment_method is None:
            return PaymentResponse.failure("Unsupported payment method")
        return await self.gateway_service.execute_payment(payment_method, payment_id)

    async def verify_payment(self, payment_id: str, method: str | None = None) -> bool:
        """Verify a payment.

        Only Nagad is confirmed with the backend. Every other method is
        assumed verified; callers relying on this for bKash or card payments
        get no backend guarantee.
        """
        if resolve_method(method) == PaymentMethod.NAGAD:
            result = await self.gateway_service.verify_payment(PaymentMethod.NAGAD, payment_id)
            return result.success
        return True
