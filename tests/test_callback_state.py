"""
Callback state table tests.
"""

import pytest

from storefront.core.exceptions import ValidationError
from storefront.domain.callback_state import (
    CALLBACK_TRANSITIONS,
    CallbackState,
    assert_callback_transition,
)

TERMINAL_STATES = [state for state in CallbackState if state != CallbackState.VERIFYING]


@pytest.mark.parametrize("target", TERMINAL_STATES)
def test_verifying_reaches_every_terminal_state(target):
    assert_callback_transition(CallbackState.VERIFYING, target)


@pytest.mark.parametrize("current", TERMINAL_STATES)
def test_terminal_states_have_no_exits(current):
    assert CALLBACK_TRANSITIONS[current] == set()
    with pytest.raises(ValidationError) as exc_info:
        assert_callback_transition(current, CallbackState.SUCCEEDED)

    assert exc_info.value.status_code == 422
    assert current.value in exc_info.value.detail


def test_cannot_return_to_verifying():
    with pytest.raises(ValidationError):
        assert_callback_transition(CallbackState.VERIFYING, CallbackState.VERIFYING)
