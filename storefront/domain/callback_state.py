"""Callback verification state machine."""

from enum import Enum

from storefront.core.exceptions import ValidationError


class CallbackState(str, Enum):
    VERIFYING = "verifying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERRORED = "errored"
    # Callback for a method this service does not handle; sent home
    IGNORED = "ignored"


CALLBACK_TRANSITIONS = {
    CallbackState.VERIFYING: {
        CallbackState.SUCCEEDED,
        CallbackState.FAILED,
        CallbackState.ERRORED,
        CallbackState.IGNORED,
    },
    CallbackState.SUCCEEDED: set(),
    CallbackState.FAILED: set(),
    CallbackState.ERRORED: set(),
    CallbackState.IGNORED: set(),
}


def assert_callback_transition(current: CallbackState, target: CallbackState) -> None:
    allowed = CALLBACK_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValidationError(
            f"Invalid callback transition: {current.value} → {target.value}"
        )
