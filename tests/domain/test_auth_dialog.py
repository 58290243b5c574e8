"""Tests for the sign-in dialog reducer."""

from __future__ import annotations

import pytest

from contest_tracker.domain.entities.auth_dialog import (
    AuthDialogEvent,
    AuthDialogEventType,
    AuthDialogState,
    AuthDialogView,
    PendingAction,
    reduce,
)

SUBSCRIBE = PendingAction(name="subscribe", payload={"contestId": "abc123"})


def _open(view: AuthDialogView = AuthDialogView.LOGIN, action: PendingAction | None = SUBSCRIBE):
    return reduce(
        AuthDialogState(),
        AuthDialogEvent(AuthDialogEventType.OPEN, view=view, pending_action=action),
    ).state


def test_login_releases_the_pending_action_once() -> None:
    state = _open()
    assert state.view is AuthDialogView.LOGIN
    assert state.pending_action == SUBSCRIBE

    transition = reduce(state, AuthDialogEvent(AuthDialogEventType.AUTHENTICATED))

    assert transition.released_action == SUBSCRIBE
    assert transition.state == AuthDialogState()
    assert not transition.state.is_open


def test_registration_moves_to_verification_before_releasing() -> None:
    state = _open(AuthDialogView.REGISTER)
    state = reduce(
        state, AuthDialogEvent(AuthDialogEventType.REGISTERED, email="ada@example.com")
    ).state

    assert state.view is AuthDialogView.VERIFY
    assert state.email == "ada@example.com"
    assert state.pending_action == SUBSCRIBE

    transition = reduce(state, AuthDialogEvent(AuthDialogEventType.AUTHENTICATED))
    assert transition.released_action == SUBSCRIBE


def test_switching_views_keeps_the_pending_action() -> None:
    state = reduce(
        _open(), AuthDialogEvent(AuthDialogEventType.SWITCH, view=AuthDialogView.REGISTER)
    ).state

    assert state.view is AuthDialogView.REGISTER
    assert state.pending_action == SUBSCRIBE


def test_closing_discards_the_pending_action() -> None:
    transition = reduce(_open(), AuthDialogEvent(AuthDialogEventType.CLOSE))

    assert transition.released_action is None
    assert transition.state.pending_action is None
    assert not transition.state.is_open


@pytest.mark.parametrize(
    ("state", "event"),
    [
        (AuthDialogState(), AuthDialogEvent(AuthDialogEventType.AUTHENTICATED)),
        (
            AuthDialogState(view=AuthDialogView.LOGIN),
            AuthDialogEvent(AuthDialogEventType.REGISTERED),
        ),
        (
            AuthDialogState(view=AuthDialogView.REGISTER),
            AuthDialogEvent(AuthDialogEventType.AUTHENTICATED),
        ),
        (
            AuthDialogState(view=AuthDialogView.LOGIN),
            AuthDialogEvent(AuthDialogEventType.SWITCH, view=AuthDialogView.VERIFY),
        ),
        (
            AuthDialogState(),
            AuthDialogEvent(AuthDialogEventType.OPEN, view=AuthDialogView.VERIFY),
        ),
    ],
)
def test_unsupported_transitions_raise(state, event) -> None:
    with pytest.raises(ValueError):
        reduce(state, event)
