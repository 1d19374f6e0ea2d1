"""Base payment gateway interface.

All provider adapters implement this interface. Adapters only translate a
provider's backend call sequence into the uniform request/response shape;
routing and method-level decisions live in the gateway service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from storefront.config import ProviderCredentials
from storefront.core.exceptions import UnsupportedOperation
from storefront.gateways.backend import BackendClient


class PaymentMethod(str, Enum):
    """Logical payment methods a checkout can select."""

    BKASH = "bkash"
    NAGAD = "nagad"
    CARD = "card"
    WALLET = "wallet"
    COD = "cod"


class GatewayCapability(str, Enum):
    """Operations an adapter may expose beyond ``create``."""

    CREATE = "create"
    EXECUTE = "execute"
    VERIFY = "verify"
    VALIDATE = "validate"


@dataclass
class PaymentRequest:
    """One checkout attempt. ``order_id`` is the backend's idempotency key."""

    amount: float
    order_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str | None = None
    description: str | None = None


@dataclass
class PaymentResponse:
    """Result of any payment operation. ``success`` is always set."""

    success: bool
    payment_url: str | None = None
    transaction_id: str | None = None
    message: str | None = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> "PaymentResponse":
        return cls(success=False, error=error or "Payment Failed")


class PaymentGateway(ABC):
    """Abstract base class for provider adapters.

    The backend client is injected at construction so adapters never resolve
    it per call and can be exercised with a substitute client.
    """

    capabilities: frozenset[GatewayCapability] = frozenset({GatewayCapability.CREATE})

    def __init__(self, backend: BackendClient, credentials: ProviderCredentials) -> None:
        self.backend = backend
        self.credentials = credentials

    @property
    @abstractmethod
    def gateway_type(self) -> PaymentMethod:
        """Return the payment method this adapter serves."""
        pass

    def supports(self, capability: GatewayCapability) -> bool:
        return capability in self.capabilities

    @abstractmethod
    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Start a payment on the provider.

        Args:
            request: Checkout attempt to initiate

        Returns:
            PaymentResponse carrying the redirect target and provider id,
            or a failure with a human-readable error
        """
        pass

    # Optional hooks; the gateway service only calls them when the matching
    # capability is declared

    async def execute_payment(self, payment_id: str) -> PaymentResponse:
        """Complete a two-phase payment."""
        return PaymentResponse.failure(
            UnsupportedOperation("execution", self.gateway_type.value).message
        )

    async def verify_payment(self, payment_id: str) -> PaymentResponse:
        """Confirm a payment out-of-band using the redirect reference."""
        return PaymentResponse.failure(
            UnsupportedOperation("verification", self.gateway_type.value).message
        )

    async def validate_payment(self, reference_id: str) -> bool:
        """Boolean confirmation of a hosted payment."""
        return False
