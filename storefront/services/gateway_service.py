"""Payment gateway service.

Routes a logical payment method to the configured provider adapter or to a
provider-less settlement path. No checkout or order logic here - only
gateway coordination.
"""

import logging

from storefront.config import Settings
from storefront.core.exceptions import ConfigurationError, UnsupportedOperation
from storefront.gateways.backend import BackendClient
from storefront.gateways.base import (
    GatewayCapability,
    PaymentGateway,
    PaymentMethod,
    PaymentRequest,
    PaymentResponse,
)
from storefront.gateways.bkash import BkashGateway
from storefront.gateways.nagad import NagadGateway
from storefront.gateways.sslcommerz import SSLCommerzGateway

logger = logging.getLogger(__name__)

GATEWAY_CLASSES: dict[PaymentMethod, type[PaymentGateway]] = {
    PaymentMethod.BKASH: BkashGateway,
    PaymentMethod.NAGAD: NagadGateway,
    PaymentMethod.CARD: SSLCommerzGateway,
}

PROVIDER_NAMES = {
    PaymentMethod.BKASH: "bKash",
    PaymentMethod.NAGAD: "Nagad",
    PaymentMethod.CARD: "SSL Commerz",
}

PROVIDERLESS_MESSAGES = {
    PaymentMethod.WALLET: "Wallet payment processed internally",
    PaymentMethod.COD: "Cash on delivery - no online payment needed",
}


def _coerce_method(method: str | PaymentMethod) -> PaymentMethod | None:
    if isinstance(method, PaymentMethod):
        return method
    try:
        return PaymentMethod(method)
    except ValueError:
        return None


class GatewayService:
    """Service for managing payment gateway operations."""

    def __init__(self, gateways: list[PaymentGateway] | None = None):
        self._gateways: dict[PaymentMethod, PaymentGateway] = {
            gateway.gateway_type: gateway for gateway in gateways or []
        }

    @classmethod
    def from_settings(cls, settings: Settings, backend: BackendClient) -> "GatewayService":
        """Instantiate adapters only for providers whose credentials are present."""
        gateways = []
        for method, gateway_class in GATEWAY_CLASSES.items():
            credentials = settings.provider_credentials(method.value)
            if credentials.is_configured:
                gateways.append(gateway_class(backend, credentials))
            else:
                logger.info(
                    f"{PROVIDER_NAMES[method]} disabled, missing: {', '.join(credentials.missing)}"
                )
        return cls(gateways)

    def _get_gateway(self, method: PaymentMethod) -> PaymentGateway:
        """Get configured gateway instance.

        Raises:
            ConfigurationError: If the provider has no adapter
        """
        gateway = self._gateways.get(method)
        if gateway is None:
            raise ConfigurationError(PROVIDER_NAMES[method])
        return gateway

    def _get_capable_gateway(
        self, method: PaymentMethod, capability: GatewayCapability, operation: str
    ) -> PaymentGateway:
        gateway = self._gateways.get(method)
        if gateway is None or not gateway.supports(capability):
            raise UnsupportedOperation(operation, method.value)
        return gateway

    def is_configured(self, method: str | PaymentMethod) -> bool:
        method = _coerce_method(method)
        if method is None:
            return False
        return method in PROVIDERLESS_MESSAGES or method in self._gateways

    def configured_methods(self) -> list[PaymentMethod]:
        return [method for method in PaymentMethod if self.is_configured(method)]

    async def process_payment(
        self,
        method: str | PaymentMethod,
        request: PaymentRequest,
    ) -> PaymentResponse:
        """Start a payment with the given method."""
        payment_method = _coerce_method(method)
        if payment_method is None:
            logger.warning(f"Unsupported payment method '{method}' for order {request.order_id}")
            return PaymentResponse.failure("Unsupported payment method")

        if payment_method in PROVIDERLESS_MESSAGES:
            return PaymentResponse(
                success=True,
                message=PROVIDERLESS_MESSAGES[payment_method],
            )

        try:
            gateway = self._get_gateway(payment_method)
        except ConfigurationError as e:
            logger.warning(f"Payment for order {request.order_id} rejected: {e}")
            return PaymentResponse.failure(e.message)

        return await gateway.create_payment(request)

    async def execute_payment(
        self,
        method: str | PaymentMethod,
        payment_id: str,
    ) -> PaymentResponse:
        """Complete a two-phase payment via gateway."""
        payment_method = _coerce_method(method)
        try:
            if payment_method is None:
                raise UnsupportedOperation("execution", str(method))
            gateway = self._get_capable_gateway(
                payment_method, GatewayCapability.EXECUTE, "execution"
            )
        except UnsupportedOperation as e:
            logger.warning(f"Execution of {payment_id} rejected for method '{method}'")
            return PaymentResponse.failure(e.message)

        return await gateway.execute_payment(payment_id)

    async def verify_payment(
        self,
        method: str | PaymentMethod,
        payment_id: str,
    ) -> PaymentResponse:
        """Verify payment status via gateway.

        Only providers exposing standalone verification are asked; every
        other method gets an explicit "not supported" failure.
        """
        payment_method = _coerce_method(method)
        try:
            if payment_method is None:
                raise UnsupportedOperation("verification", str(method))
            gateway = self._get_capable_gateway(
                payment_method, GatewayCapability.VERIFY, "verification"
            )
        except UnsupportedOperation as e:
            logger.warning(f"Verification of {payment_id} rejected for method '{method}'")
            return PaymentResponse.failure(e.message)

        return await gateway.verify_payment(payment_id)

    async def validate_payment(
        self,
        method: str | PaymentMethod,
        reference_id: str,
    ) -> bool:
        """Validate a card payment reference. False when unavailable."""
        payment_method = _coerce_method(method)
        if payment_method is None:
            return False
        try:
            gateway = self._get_capable_gateway(
                payment_method, GatewayCapability.VALIDATE, "validation"
            )
        except UnsupportedOperation:
            logger.warning(f"Validation of {reference_id} rejected for method '{method}'")
            return False

        return await gateway.validate_payment(reference_id)
