"""
Provider adapter tests.

Each adapter is driven by a substitute backend client; backend faults must
come back as failure responses, never as exceptions.
"""

import pytest

from storefront.core.exceptions import TransportError
from storefront.gateways.base import GatewayCapability, PaymentMethod


class TestGatewayContract:
    def test_capabilities(self, bkash_gateway, nagad_gateway, card_gateway):
        assert bkash_gateway.supports(GatewayCapability.EXECUTE)
        assert not bkash_gateway.supports(GatewayCapability.VERIFY)
        assert nagad_gateway.supports(GatewayCapability.VERIFY)
        assert not nagad_gateway.supports(GatewayCapability.EXECUTE)
        assert card_gateway.supports(GatewayCapability.VALIDATE)
        for gateway in (bkash_gateway, nagad_gateway, card_gateway):
            assert gateway.supports(GatewayCapability.CREATE)

    def test_gateway_types(self, bkash_gateway, nagad_gateway, card_gateway):
        assert bkash_gateway.gateway_type == PaymentMethod.BKASH
        assert nagad_gateway.gateway_type == PaymentMethod.NAGAD
        assert card_gateway.gateway_type == PaymentMethod.CARD


class TestBkashGateway:
    @pytest.mark.asyncio
    async def test_create_returns_redirect(self, bkash_gateway, backend, payment_request):
        backend.create_payment.return_value = {
            "paymentID": "TR0011abc",
            "redirectURL": "https://sandbox.bka.sh/checkout/TR0011abc",
        }

        result = await bkash_gateway.create_payment(payment_request)

        assert result.success is True
        assert result.payment_url == "https://sandbox.bka.sh/checkout/TR0011abc"
        assert result.transaction_id == "TR0011abc"
        backend.create_payment.assert_awaited_once_with(
            amount=1250.0, method="bkash", reference="ORD-1001"
        )

    @pytest.mark.asyncio
    async def test_create_without_redirect_fails(self, bkash_gateway, backend, payment_request):
        backend.create_payment.return_value = {"paymentID": "TR0011abc"}

        result = await bkash_gateway.create_payment(payment_request)

        assert result.success is False
        assert result.error == "Failed to retrieve payment URL from backend"

    @pytest.mark.asyncio
    async def test_create_transport_error_is_caught(self, bkash_gateway, backend, payment_request):
        backend.create_payment.side_effect = TransportError("createPayment", "Backend unreachable")

        result = await bkash_gateway.create_payment(payment_request)

        assert result.success is False
        assert result.error == "Backend unreachable"

    @pytest.mark.asyncio
    async def test_execute_success(self, bkash_gateway, backend):
        backend.execute_payment.return_value = {"success": True, "trxID": "8K7A1B2C", "message": "ok"}

        result = await bkash_gateway.execute_payment("TR0011abc")

        assert result.success is True
        assert result.transaction_id == "8K7A1B2C"
        assert result.message == "ok"
        backend.execute_payment.assert_awaited_once_with(payment_id="TR0011abc", method="bkash")

    @pytest.mark.asyncio
    async def test_execute_unsuccessful(self, bkash_gateway, backend):
        backend.execute_payment.return_value = {"success": False}

        result = await bkash_gateway.execute_payment("TR0011abc")

        assert result.success is False
        assert result.error == "Payment execution failed on backend"

    @pytest.mark.asyncio
    async def test_execute_unexpected_exception_is_caught(self, bkash_gateway, backend):
        backend.execute_payment.side_effect = RuntimeError("boom")

        result = await bkash_gateway.execute_payment("TR0011abc")

        assert result.success is False
        assert result.error == "boom"


class TestNagadGateway:
    @pytest.mark.asyncio
    async def test_create_returns_redirect(self, nagad_gateway, backend, payment_request):
        backend.create_payment.return_value = {
            "paymentID": "ORD-1001",
            "redirectURL": "https://sandbox.mynagad.com/check-out/ORD-1001",
        }

        result = await nagad_gateway.create_payment(payment_request)

        assert result.success is True
        assert result.payment_url.endswith("/ORD-1001")
        backend.create_payment.assert_awaited_once_with(
            amount=1250.0, method="nagad", reference="ORD-1001"
        )

    @pytest.mark.asyncio
    async def test_create_without_redirect_fails(self, nagad_gateway, backend, payment_request):
        backend.create_payment.return_value = {}

        result = await nagad_gateway.create_payment(payment_request)

        assert result.success is False
        assert "Nagad" in result.error

    @pytest.mark.asyncio
    async def test_verify_success(self, nagad_gateway, backend):
        backend.verify_nagad_payment.return_value = {"success": True, "transactionId": "ISS-77"}

        result = await nagad_gateway.verify_payment("REF1")

        assert result.success is True
        assert result.transaction_id == "ISS-77"
        assert result.message == "Payment verified successfully"
        backend.verify_nagad_payment.assert_awaited_once_with("REF1")

    @pytest.mark.asyncio
    async def test_verify_rejected_by_backend(self, nagad_gateway, backend):
        backend.verify_nagad_payment.return_value = {
            "success": False,
            "error": "Verification failed or payment not successful",
        }

        result = await nagad_gateway.verify_payment("REF1")

        assert result.success is False
        assert result.error == "Verification failed or payment not successful"

    @pytest.mark.asyncio
    async def test_verify_transport_error(self, nagad_gateway, backend):
        backend.verify_nagad_payment.side_effect = TransportError("verifyNagadPayment")

        result = await nagad_gateway.verify_payment("REF1")

        assert result.success is False
        assert result.error == "Backend call 'verifyNagadPayment' failed"


class TestSSLCommerzGateway:
    @pytest.mark.asyncio
    async def test_create_passes_customer_details(self, card_gateway, backend, payment_request):
        backend.initiate_card_payment.return_value = {
            "success": True,
            "paymentUrl": "https://sandbox.sslcommerz.com/EasyCheckOut/abc",
        }

        result = await card_gateway.create_payment(payment_request)

        assert result.success is True
        assert result.payment_url == "https://sandbox.sslcommerz.com/EasyCheckOut/abc"
        backend.initiate_card_payment.assert_awaited_once_with(
            amount=1250.0,
            customer_name="Rahim Uddin",
            customer_email="rahim@example.com",
            customer_phone="01811000000",
            customer_address="Sakhipur, Tangail",
            reference="ORD-1001",
        )

    @pytest.mark.asyncio
    async def test_create_requires_payment_url(self, card_gateway, backend, payment_request):
        backend.initiate_card_payment.return_value = {"success": True}

        result = await card_gateway.create_payment(payment_request)

        assert result.success is False
        assert result.error == "Failed to initiate payment via backend"

    @pytest.mark.asyncio
    async def test_validate(self, card_gateway, backend):
        backend.validate_card_payment.return_value = {"success": True}
        assert await card_gateway.validate_payment("VAL-1") is True

        backend.validate_card_payment.return_value = {}
        assert await card_gateway.validate_payment("VAL-1") is False

    @pytest.mark.asyncio
    async def test_validate_collapses_errors_to_false(self, card_gateway, backend):
        backend.validate_card_payment.side_effect = TransportError("validateSSLPayment")

        assert await card_gateway.validate_payment("VAL-1") is False


class TestMalformedReplies:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, "ok", ["redirectURL"]])
    async def test_create_with_non_mapping_reply_fails(
        self, bkash_gateway, nagad_gateway, card_gateway, backend, payment_request, reply
    ):
        backend.create_payment.return_value = reply
        backend.initiate_card_payment.return_value = reply

        for gateway in (bkash_gateway, nagad_gateway, card_gateway):
            result = await gateway.create_payment(payment_request)

            assert result.success is False
            assert result.error.startswith("Failed to")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, "ok"])
    async def test_follow_up_calls_with_non_mapping_reply(
        self, bkash_gateway, nagad_gateway, card_gateway, backend, reply
    ):
        backend.execute_payment.return_value = reply
        backend.verify_nagad_payment.return_value = reply
        backend.validate_card_payment.return_value = reply

        executed = await bkash_gateway.execute_payment("TR0011abc")
        verified = await nagad_gateway.verify_payment("REF1")

        assert executed.error == "Payment execution failed on backend"
        assert verified.error == "Verification failed"
        assert await card_gateway.validate_payment("VAL-1") is False


class TestUndeclaredCapabilities:
    @pytest.mark.asyncio
    async def test_base_hooks_fail_without_backend_call(
        self, bkash_gateway, nagad_gateway, backend
    ):
        executed = await nagad_gateway.execute_payment("P1")
        verified = await bkash_gateway.verify_payment("P1")

        assert executed.success is False
        assert executed.error == "Execution not supported for this method"
        assert verified.error == "Verification not supported for this method"
        assert await bkash_gateway.validate_payment("VAL-1") is False
        assert backend.mock_calls == []
