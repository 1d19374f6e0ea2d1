"""SSLCommerz card gateway adapter."""

import logging

from storefront.gateways.base import (
    GatewayCapability,
    PaymentGateway,
    PaymentMethod,
    PaymentRequest,
    PaymentResponse,
)

logger = logging.getLogger(__name__)


class SSLCommerzGateway(PaymentGateway):
    """SSLCommerz gateway for credit/debit cards."""

    capabilities = frozenset({GatewayCapability.CREATE, GatewayCapability.VALIDATE})

    @property
    def gateway_type(self) -> PaymentMethod:
        return PaymentMethod.CARD

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Initiate an SSLCommerz hosted card session."""
        try:
            data = await self.backend.initiate_card_payment(
                amount=request.amount,
                customer_name=request.customer_name,
                customer_email=request.customer_email,
                customer_phone=request.customer_phone,
                customer_address=request.customer_address,
                reference=request.order_id,
            )
            if isinstance(data, dict) and data.get("success") and data.get("paymentUrl"):
                return PaymentResponse(
                    success=True,
                    payment_url=data["paymentUrl"],
                    transaction_id=data.get("transactionId"),
                )
        except Exception as e:
            logger.error(f"SSLCommerz payment error for order {request.order_id}: {e}")
            return PaymentResponse.failure(str(e) or "Backend error")

        return PaymentResponse.failure("Failed to initiate payment via backend")

    async def validate_payment(self, val_id: str) -> bool:
        """Validate a card payment. Any backend fault counts as not valid."""
        try:
            data = await self.backend.validate_card_payment(val_id)
            return isinstance(data, dict) and bool(data.get("success"))
        except Exception as e:
            logger.error(f"SSLCommerz validation error for {val_id}: {e}")
            return False
