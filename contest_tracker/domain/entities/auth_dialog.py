"""State transitions for the sign-in dialog shown by the web client.

The dialog is modelled as an immutable state plus a pure ``reduce`` function
so the client can keep it in an explicit store instead of a global provider.
An action requested by an anonymous visitor (for example "subscribe to this
contest") is carried as a :class:`PendingAction` and handed back exactly once
after a successful sign-in.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class AuthDialogView(str, Enum):
    CLOSED = "closed"
    LOGIN = "login"
    REGISTER = "register"
    VERIFY = "verify"


class AuthDialogEventType(str, Enum):
    OPEN = "open"
    SWITCH = "switch"
    REGISTERED = "registered"
    AUTHENTICATED = "authenticated"
    CLOSE = "close"


@dataclass(frozen=True)
class PendingAction:
    """Action to resume once the visitor is authenticated."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthDialogState:
    view: AuthDialogView = AuthDialogView.CLOSED
    pending_action: PendingAction | None = None
    email: str | None = None

    @property
    def is_open(self) -> bool:
        return self.view is not AuthDialogView.CLOSED


@dataclass(frozen=True)
class AuthDialogEvent:
    type: AuthDialogEventType
    view: AuthDialogView | None = None
    pending_action: PendingAction | None = None
    email: str | None = None


@dataclass(frozen=True)
class AuthDialogTransition:
    """Result of applying an event: the next state and any released action."""

    state: AuthDialogState
    released_action: PendingAction | None = None


_OPENABLE_VIEWS = frozenset({AuthDialogView.LOGIN, AuthDialogView.REGISTER})


def reduce(state: AuthDialogState, event: AuthDialogEvent) -> AuthDialogTransition:
    """Apply ``event`` to ``state`` and return the resulting transition.

    Raises ``ValueError`` for transitions the dialog does not support.
    """

    if event.type is AuthDialogEventType.OPEN:
        view = event.view or AuthDialogView.LOGIN
        if view not in _OPENABLE_VIEWS:
            raise ValueError(f"The dialog cannot be opened on the '{view.value}' view")
        return AuthDialogTransition(
            AuthDialogState(view=view, pending_action=event.pending_action)
        )

    if not state.is_open:
        if event.type is AuthDialogEventType.CLOSE:
            return AuthDialogTransition(state)
        raise ValueError(f"Cannot apply '{event.type.value}' while the dialog is closed")

    if event.type is AuthDialogEventType.SWITCH:
        if event.view not in _OPENABLE_VIEWS:
            raise ValueError("Only the login and register views can be selected")
        return AuthDialogTransition(replace(state, view=event.view))

    if event.type is AuthDialogEventType.REGISTERED:
        if state.view is not AuthDialogView.REGISTER:
            raise ValueError("Registration can only complete from the register view")
        return AuthDialogTransition(
            replace(state, view=AuthDialogView.VERIFY, email=event.email)
        )

    if event.type is AuthDialogEventType.AUTHENTICATED:
        if state.view not in (AuthDialogView.LOGIN, AuthDialogView.VERIFY):
            raise ValueError("Authentication can only complete from login or verify")
        return AuthDialogTransition(AuthDialogState(), released_action=state.pending_action)

    # CLOSE drops whatever action was waiting.
    return AuthDialogTransition(AuthDialogState())


__all__ = [
    "AuthDialogEvent",
    "AuthDialogEventType",
    "AuthDialogState",
    "AuthDialogTransition",
    "AuthDialogView",
    "PendingAction",
    "reduce",
]
