"""Nagad remote payment gateway adapter.

The Nagad redirect back to the storefront is client-controllable, so a
payment is only trusted after ``verify_payment`` confirms it through the
backend using the ``payment_ref_id`` from the redirect.
"""

import logging

from storefront.gateways.base import (
    GatewayCapability,
    PaymentGateway,
    PaymentMethod,
    PaymentRequest,
    PaymentResponse,
)

logger = logging.getLogger(__name__)


class NagadGateway(PaymentGateway):
    """Nagad payment gateway implementation."""

    capabilities = frozenset({GatewayCapability.CREATE, GatewayCapability.VERIFY})

    @property
    def gateway_type(self) -> PaymentMethod:
        return PaymentMethod.NAGAD

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Initialize Nagad checkout via the backend."""
        try:
            data = await self.backend.create_payment(
                amount=request.amount,
                method=self.gateway_type.value,
                reference=request.order_id,
            )
            if isinstance(data, dict) and data.get("redirectURL"):
                return PaymentResponse(
                    success=True,
                    payment_url=data["redirectURL"],
                    transaction_id=data.get("paymentID"),
                )
        except Exception as e:
            logger.error(f"Nagad payment error for order {request.order_id}: {e}")
            return PaymentResponse.failure(str(e) or "Backend error")

        return PaymentResponse.failure("Failed to retrieve Nagad payment URL from backend")

    async def verify_payment(self, payment_ref_id: str) -> PaymentResponse:
        """Confirm a Nagad payment out-of-band.

        Args:
            payment_ref_id: ``payment_ref_id`` from the provider redirect

        Returns:
            PaymentResponse with the issuer transaction id on success
        """
        try:
            data = await self.backend.verify_nagad_payment(payment_ref_id)
            if isinstance(data, dict) and data.get("success"):
                return PaymentResponse(
                    success=True,
                    transaction_id=data.get("transactionId"),
                    message="Payment verified successfully",
                )
            error = data.get("error") if isinstance(data, dict) else None
        except Exception as e:
            logger.error(f"Nagad verification error for {payment_ref_id}: {e}")
            return PaymentResponse.failure(str(e) or "Backend verification error")

        return PaymentResponse.failure(error or "Verification failed")
