"""Payment-related Pydantic schemas.

Field names are serialised in camelCase for the checkout frontend.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerInfo(CamelModel):
    """Customer contact details sent to card gateways."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=254)
    phone: str = Field(..., max_length=32)
    address: str | None = Field(None, max_length=500)


class PaymentInitiateRequest(CamelModel):
    """Schema for starting a checkout payment."""

    order_id: str = Field(..., min_length=1, max_length=128)
    method: str = Field(..., min_length=1, max_length=32)
    amount: float = Field(..., gt=0)
    customer_info: CustomerInfo | None = None


class PaymentInitiationResult(CamelModel):
    """Result of a checkout initiation.

    ``payment_url`` is the only stored field; ``redirect_url`` is a read-only
    alias kept for older consumers.
    """

    success: bool
    payment_id: str | None = None
    payment_url: str | None = None
    message: str | None = None
    error: str | None = None

    @computed_field(alias="redirectUrl")
    @property
    def redirect_url(self) -> str | None:
        return self.payment_url


class PaymentVerifyRequest(CamelModel):
    """Schema for a standalone verification request."""

    payment_id: str = Field(..., min_length=1, max_length=128)
    method: str | None = Field(None, max_length=32)


class PaymentVerifyResponse(CamelModel):
    verified: bool


class PaymentExecuteRequest(CamelModel):
    """Schema for completing a two-phase payment."""

    payment_id: str = Field(..., min_length=1, max_length=128)
    method: str = Field(..., min_length=1, max_length=32)


class PaymentResultResponse(CamelModel):
    """Uniform gateway result."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    payment_url: str | None = None
    transaction_id: str | None = None
    message: str | None = None
    error: str | None = None


class PaymentMethodsResponse(BaseModel):
    methods: list[str]
