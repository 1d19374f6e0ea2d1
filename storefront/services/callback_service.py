"""Provider return-redirect resolution.

A ``CallbackResolver`` is created once per provider redirect. It reads the
redirect's query parameters, confirms the payment with the backend where the
provider requires it, and produces exactly one navigation outcome. Redirect
parameters are untrusted: a Nagad ``status=Success`` is never accepted
without backend verification of its ``payment_ref_id``.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from storefront.config import Settings
from storefront.core.exceptions import (
    CallbackValidationError,
    GatewayError,
    VerificationFailure,
)
from storefront.domain.callback_state import CallbackState, assert_callback_transition
from storefront.domain.payment_state import PaymentStatus
from storefront.gateways.base import PaymentMethod
from storefront.services.gateway_service import GatewayService

logger = logging.getLogger(__name__)

NAGAD_SUCCESS_STATUS = "Success"
BKASH_SUCCESS_STATUS = "success"
CARD_VALID_STATUSES = {"VALID", "VALIDATED"}
CARD_CANCELLED_STATUS = "CANCELLED"


class FailureReason(str, Enum):
    FAILED = "failed"
    VERIFICATION_FAILED = "verification_failed"
    INVALID_CALLBACK = "invalid_callback"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True)
class CallbackContext:
    """Method token from the callback route plus the raw redirect query."""

    method: str
    params: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str | None:
        value = self.params.get(name)
        if value is None or not str(value).strip():
            return None
        return str(value)


@dataclass(frozen=True)
class NavigationTargets:
    """Where the browser is sent once a callback resolves."""

    success_path: str = "/order-success"
    failure_path: str = "/cart"
    home_path: str = "/"
    base_url: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "NavigationTargets":
        return cls(
            success_path=settings.payment_success_path,
            failure_path=settings.payment_failure_path,
            home_path=settings.home_path,
            base_url=settings.storefront_base_url,
        )

    def _build(self, path: str, params: dict[str, str] | None = None) -> str:
        url = path
        if params:
            url = f"{path}?{urlencode(params)}"
        if self.base_url:
            url = f"{self.base_url.rstrip('/')}{url}"
        return url

    def success(self, transaction_id: str | None = None) -> str:
        params = {"paymentStatus": "success"}
        if transaction_id:
            params["trxID"] = transaction_id
        return self._build(self.success_path, params)

    def failure(self, reason: FailureReason = FailureReason.FAILED) -> str:
        if reason == FailureReason.ERROR:
            return self._build(self.failure_path, {"paymentStatus": "error"})
        if reason == FailureReason.CANCELLED:
            return self._build(self.failure_path, {"paymentStatus": "cancelled"})
        params = {"paymentStatus": "failed"}
        if reason != FailureReason.FAILED:
            params["reason"] = reason.value
        return self._build(self.failure_path, params)

    def home(self) -> str:
        return self._build(self.home_path)


@dataclass(frozen=True)
class CallbackOutcome:
    state: CallbackState
    target: str
    reason: FailureReason | None = None
    transaction_id: str | None = None
    payment_status: PaymentStatus | None = None


Navigator = Callable[[str], Awaitable[Any] | Any]


class CallbackResolver:
    """One-shot state machine: ``verifying`` to a single terminal state."""

    def __init__(
        self,
        gateway_service: GatewayService,
        targets: NavigationTargets | None = None,
        navigate: Navigator | None = None,
    ):
        self.gateway_service = gateway_service
        self.targets = targets or NavigationTargets()
        self.navigate = navigate
        self.state = CallbackState.VERIFYING
        self._outcome: CallbackOutcome | None = None
        self._started = False
        self._torn_down = False

    @property
    def outcome(self) -> CallbackOutcome | None:
        return self._outcome

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def teardown(self) -> None:
        """Discard the hosting view. A pending run will not navigate."""
        self._torn_down = True

    async def run(self, context: CallbackContext) -> CallbackOutcome | None:
        """Resolve the callback and navigate once.

        Returns the outcome, or None when the resolver was torn down before
        the outcome was reached. A second call returns the first outcome
        without navigating again.
        """
        if self._started:
            return self._outcome
        self._started = True

        try:
            outcome = await self._resolve(context)
        except asyncio.CancelledError:
            self._torn_down = True
            logger.info(f"Callback for '{context.method}' cancelled before resolving")
            raise
        except GatewayError as e:
            logger.info(f"Callback for '{context.method}' failed: {e.message}")
            reason = FailureReason(e.reason)
            outcome = self._finish(
                CallbackState.FAILED, self.targets.failure(reason), reason=reason
            )
        except Exception:
            logger.exception(f"Payment callback error for '{context.method}'")
            outcome = self._finish(
                CallbackState.ERRORED,
                self.targets.failure(FailureReason.ERROR),
                reason=FailureReason.ERROR,
            )

        if self._torn_down:
            logger.info(f"Navigation to {outcome.target} suppressed, view was torn down")
            return None

        if self.navigate is not None:
            try:
                result = self.navigate(outcome.target)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Navigation to {outcome.target} failed")
        return outcome

    async def _resolve(self, context: CallbackContext) -> CallbackOutcome:
        method = (context.method or "").strip().lower()
        if method == PaymentMethod.NAGAD.value:
            return await self._resolve_nagad(context)
        if method == PaymentMethod.BKASH.value:
            return self._resolve_bkash(context)
        if method == PaymentMethod.CARD.value:
            return await self._resolve_card(context)

        logger.info(f"Unrecognized callback method '{context.method}', returning home")
        return self._finish(CallbackState.IGNORED, self.targets.home())

    async def _resolve_nagad(self, context: CallbackContext) -> CallbackOutcome:
        if context.get("status") != NAGAD_SUCCESS_STATUS:
            return self._failed()

        ref_id = context.get("payment_ref_id")
        if ref_id is None:
            raise CallbackValidationError("Nagad callback is missing payment_ref_id")

        result = await self.gateway_service.verify_payment(PaymentMethod.NAGAD, ref_id)
        if not result.success:
            raise VerificationFailure(result.error or "Verification failed")

        return self._succeeded(ref_id)

    def _resolve_bkash(self, context: CallbackContext) -> CallbackOutcome:
        # bKash redirects are not re-verified with the backend
        if context.get("status") == BKASH_SUCCESS_STATUS:
            return self._succeeded(None)
        return self._failed()

    async def _resolve_card(self, context: CallbackContext) -> CallbackOutcome:
        status = (context.get("status") or "").upper()
        if status == CARD_CANCELLED_STATUS:
            return self._finish(
                CallbackState.FAILED,
                self.targets.failure(FailureReason.CANCELLED),
                reason=FailureReason.CANCELLED,
            )
        if status not in CARD_VALID_STATUSES:
            return self._failed()

        val_id = context.get("val_id")
        if val_id is None:
            raise CallbackValidationError("Card callback is missing val_id")

        if not await self.gateway_service.validate_payment(PaymentMethod.CARD, val_id):
            raise VerificationFailure(f"Card payment {val_id} did not validate")

        return self._succeeded(context.get("tran_id") or val_id)

    def _succeeded(self, transaction_id: str | None) -> CallbackOutcome:
        return self._finish(
            CallbackState.SUCCEEDED,
            self.targets.success(transaction_id),
            transaction_id=transaction_id,
        )

    def _failed(self) -> CallbackOutcome:
        return self._finish(
            CallbackState.FAILED,
            self.targets.failure(FailureReason.FAILED),
            reason=FailureReason.FAILED,
        )

    def _finish(
        self,
        state: CallbackState,
        target: str,
        reason: FailureReason | None = None,
        transaction_id: str | None = None,
    ) -> CallbackOutcome:
        assert_callback_transition(self.state, state)
        self.state = state

        payment_status = None
        if state == CallbackState.SUCCEEDED:
            payment_status = PaymentStatus.SUCCESS
        elif reason == FailureReason.CANCELLED:
            payment_status = PaymentStatus.CANCELLED
        elif state in (CallbackState.FAILED, CallbackState.ERRORED):
            payment_status = PaymentStatus.FAILED

        self._outcome = CallbackOutcome(
            state=state,
            target=target,
            reason=reason,
            transaction_id=transaction_id,
            payment_status=payment_status,
        )
        logger.info(f"Payment callback resolved: {state.value} -> {target}")
        return self._outcome
