"""bKash tokenized checkout adapter.

bKash is a two-phase provider: ``create`` returns a hosted checkout URL and a
payment id, and the payment only settles once ``execute`` is called with
that id.
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


class BkashGateway(PaymentGateway):
    """bKash payment gateway implementation."""

    capabilities = frozenset({GatewayCapability.CREATE, GatewayCapability.EXECUTE})

    @property
    def gateway_type(self) -> PaymentMethod:
        return PaymentMethod.BKASH

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Create bKash payment and return the checkout redirect."""
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
            logger.error(f"bKash create payment error for order {request.order_id}: {e}")
            return PaymentResponse.failure(str(e) or "Backend error")

        return PaymentResponse.failure("Failed to retrieve payment URL from backend")

    async def execute_payment(self, payment_id: str) -> PaymentResponse:
        """Finalize a previously created bKash payment."""
        try:
            data = await self.backend.execute_payment(
                payment_id=payment_id,
                method=self.gateway_type.value,
            )
            if isinstance(data, dict) and data.get("success"):
                return PaymentResponse(
                    success=True,
                    transaction_id=data.get("trxID"),
                    message=data.get("message"),
                )
        except Exception as e:
            logger.error(f"bKash execute payment error for {payment_id}: {e}")
            return PaymentResponse.failure(str(e) or "Backend execution error")

        return PaymentResponse.failure("Payment execution failed on backend")
