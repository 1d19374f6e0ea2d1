"""Client for the remote payment backend.

The backend exposes callable functions over HTTPS. Each call posts
``{"data": {...}}`` to ``{base_url}/{name}`` and receives either
``{"result": {...}}`` or ``{"error": {"message": ...}}``.
"""

import logging
from typing import Any

import httpx

from storefront.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class BackendClient:
    """Async RPC client for payment backend functions."""

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: str | None = None,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = httpx.Timeout(timeout)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def call(self, name: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Invoke backend function ``name`` and return its result mapping.

        Raises:
            TransportError: On network failure, timeout, error envelope or
                a reply that is not a JSON object result
        """
        try:
            response = await self._client.post(
                f"{self.base_url}/{name}",
                json={"data": payload},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(name, f"Backend call '{name}' timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(name, f"Backend call '{name}' failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(name, f"Backend call '{name}' returned invalid JSON") from e

        if not isinstance(body, dict):
            raise TransportError(name, f"Backend call '{name}' returned an unexpected body")

        error = body.get("error")
        if error or response.status_code >= 400:
            message = error.get("message") if isinstance(error, dict) else None
            raise TransportError(
                name, message or f"Backend call '{name}' returned {response.status_code}"
            )

        result = body.get("result")
        if not isinstance(result, dict):
            raise TransportError(name, f"Backend call '{name}' returned no result")
        return result

    async def create_payment(self, amount: float, method: str, reference: str) -> dict[str, Any]:
        return await self.call(
            "createPayment", {"amount": amount, "method": method, "reference": reference}
        )

    async def execute_payment(self, payment_id: str, method: str) -> dict[str, Any]:
        return await self.call("executePayment", {"paymentID": payment_id, "method": method})

    async def verify_nagad_payment(self, payment_ref_id: str) -> dict[str, Any]:
        return await self.call("verifyNagadPayment", {"paymentRefId": payment_ref_id})

    async def initiate_card_payment(
        self,
        amount: float,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        reference: str,
        customer_address: str | None = None,
    ) -> dict[str, Any]:
        return await self.call(
            "initiateSSLPayment",
            {
                "amount": amount,
                "customerName": customer_name,
                "customerEmail": customer_email,
                "customerPhone": customer_phone,
                "customerAddress": customer_address,
                "reference": reference,
            },
        )

    async def validate_card_payment(self, reference_id: str) -> dict[str, Any]:
        return await self.call("validateSSLPayment", {"val_id": reference_id})

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.info("Payment backend client closed")
