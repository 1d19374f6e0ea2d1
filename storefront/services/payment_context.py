"""Process-wide payment wiring.

Built once at application startup and handed to request handlers, instead of
module-level gateway singletons.
"""

import logging
from dataclasses import dataclass

import httpx

from storefront.config import Settings
from storefront.gateways.backend import BackendClient
from storefront.services.callback_service import CallbackResolver, Navigator, NavigationTargets
from storefront.services.gateway_service import GatewayService
from storefront.services.payment_service import PaymentService

logger = logging.getLogger(__name__)


@dataclass
class PaymentContext:
    settings: Settings
    backend: BackendClient
    gateway_service: GatewayService
    payment_service: PaymentService
    targets: NavigationTargets

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> "PaymentContext":
        backend = BackendClient(
            settings.backend_base_url,
            auth_token=settings.backend_auth_token,
            timeout=settings.backend_timeout_seconds,
            client=client,
        )
        gateway_service = GatewayService.from_settings(settings, backend)
        logger.info(
            "Payment methods available: "
            + ", ".join(method.value for method in gateway_service.configured_methods())
        )
        return cls(
            settings=settings,
            backend=backend,
            gateway_service=gateway_service,
            payment_service=PaymentService(gateway_service),
            targets=NavigationTargets.from_settings(settings),
        )

    def callback_resolver(self, navigate: Navigator | None = None) -> CallbackResolver:
        return CallbackResolver(self.gateway_service, self.targets, navigate=navigate)

    async def aclose(self) -> None:
        await self.backend.aclose()
