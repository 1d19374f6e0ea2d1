"""
Shared test configuration and fixtures for the storefront payments suite.
"""

from unittest.mock import AsyncMock

import pytest

from storefront.config import Settings
from storefront.gateways.backend import BackendClient
from storefront.gateways.base import PaymentRequest
from storefront.gateways.bkash import BkashGateway
from storefront.gateways.nagad import NagadGateway
from storefront.gateways.sslcommerz import SSLCommerzGateway
from storefront.services.callback_service import NavigationTargets
from storefront.services.gateway_service import GatewayService
from storefront.services.payment_service import PaymentService


@pytest.fixture
def settings():
    """Settings with every provider configured."""
    return Settings(
        _env_file=None,
        backend_base_url="https://backend.test/fn",
        bkash_app_key="bkash-app-key",
        bkash_app_secret="bkash-secret",
        nagad_merchant_id="683002007104225",
        ssl_store_id="teststore01",
        ssl_store_password="teststore01@ssl",
    )


@pytest.fixture
def bare_settings():
    """Settings with no provider credentials at all."""
    return Settings(
        _env_file=None,
        backend_base_url="https://backend.test/fn",
        bkash_app_key=None,
        nagad_merchant_id=None,
        ssl_store_id=None,
    )


@pytest.fixture
def backend():
    """Substitute backend client; every RPC is an AsyncMock."""
    return AsyncMock(spec=BackendClient)


@pytest.fixture
def bkash_gateway(backend, settings):
    return BkashGateway(backend, settings.provider_credentials("bkash"))


@pytest.fixture
def nagad_gateway(backend, settings):
    return NagadGateway(backend, settings.provider_credentials("nagad"))


@pytest.fixture
def card_gateway(backend, settings):
    return SSLCommerzGateway(backend, settings.provider_credentials("card"))


@pytest.fixture
def gateway_service(settings, backend):
    return GatewayService.from_settings(settings, backend)


@pytest.fixture
def payment_service(gateway_service):
    return PaymentService(gateway_service)


@pytest.fixture
def targets():
    return NavigationTargets()


@pytest.fixture
def payment_request():
    return PaymentRequest(
        amount=1250.0,
        order_id="ORD-1001",
        customer_name="Rahim Uddin",
        customer_email="rahim@example.com",
        customer_phone="01811000000",
        customer_address="Sakhipur, Tangail",
    )
