"""Session state machine.

Pure transition logic deciding whether the user sees the login screen,
onboarding, or the main navigation. All asynchronous work (identity lookup,
the launch health probe, participant creation, persisting onboarding) happens
outside this module; its outcomes come back in as events and the side effects
a transition asks for are returned as :class:`Effect` values.

Transitions are total: any event that does not apply to the current state
leaves the snapshot unchanged, so duplicate or late deliveries are harmless.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple, Union


class SessionState(Enum):
    LOGGED_OUT = "LoggedOut"
    ONBOARDING = "Onboarding"
    ACTIVE = "Active"


class Effect(Enum):
    """Side effects requested by a transition."""
    CREATE_PARTICIPANT = "create_participant"
    PERSIST_ONBOARDING_COMPLETE = "persist_onboarding_complete"
    CLEAR_IDENTITY = "clear_identity"
    NOTIFY_CONNECTIVITY = "notify_connectivity"
    NOTIFY_LOGIN_FAILED = "notify_login_failed"


# --- Events ---

@dataclass(frozen=True)
class LoginSucceeded:
    pass


@dataclass(frozen=True)
class LoginCancelled:
    pass


@dataclass(frozen=True)
class LoginFailed:
    reason: str = ""


@dataclass(frozen=True)
class HealthCheckSucceeded:
    pass


@dataclass(frozen=True)
class HealthCheckFailed:
    pass


@dataclass(frozen=True)
class OnboardingFinished:
    pass


@dataclass(frozen=True)
class LogoutRequested:
    pass


SessionEvent = Union[
    LoginSucceeded,
    LoginCancelled,
    LoginFailed,
    HealthCheckSucceeded,
    HealthCheckFailed,
    OnboardingFinished,
    LogoutRequested,
]


def event_name(event: SessionEvent) -> str:
    return type(event).__name__


@dataclass(frozen=True)
class SessionSnapshot:
    """Current state plus whether the launch health probe is still outstanding."""
    state: SessionState
    health_check_pending: bool = False


@dataclass(frozen=True)
class Transition:
    previous: SessionSnapshot
    snapshot: SessionSnapshot
    effects: Tuple[Effect, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return self.previous.state is not self.snapshot.state


def initial_snapshot(has_identity: bool, health_check_enabled: bool = True) -> SessionSnapshot:
    """Resolve the launch state from the stored identity.

    Without an identity the health probe is skipped entirely. With one, the
    user goes straight to the main navigation while the probe is outstanding;
    a failed probe sends them back to login.
    """
    if not has_identity:
        return SessionSnapshot(SessionState.LOGGED_OUT)
    return SessionSnapshot(SessionState.ACTIVE, health_check_pending=health_check_enabled)


def transition(
    snapshot: SessionSnapshot,
    event: SessionEvent,
    onboarding_complete: bool,
) -> Transition:
    """Apply one event to a snapshot. Never raises."""
    state = snapshot.state

    def to(next_state: SessionState, *effects: Effect) -> Transition:
        return Transition(snapshot, SessionSnapshot(next_state), effects)

    def unchanged(*effects: Effect) -> Transition:
        return Transition(snapshot, snapshot, effects)

    if isinstance(event, (HealthCheckSucceeded, HealthCheckFailed)):
        # At most one health result per launch is acted on
        if not snapshot.health_check_pending:
            return unchanged()
        if isinstance(event, HealthCheckFailed):
            return to(SessionState.LOGGED_OUT, Effect.NOTIFY_CONNECTIVITY)
        return Transition(snapshot, replace(snapshot, health_check_pending=False))

    if state is SessionState.LOGGED_OUT:
        if isinstance(event, LoginSucceeded):
            if onboarding_complete:
                return to(SessionState.ACTIVE)
            return to(SessionState.ONBOARDING, Effect.CREATE_PARTICIPANT)
        if isinstance(event, LoginFailed):
            return unchanged(Effect.NOTIFY_LOGIN_FAILED)
        return unchanged()

    if state is SessionState.ONBOARDING:
        if isinstance(event, OnboardingFinished):
            return to(SessionState.ACTIVE, Effect.PERSIST_ONBOARDING_COMPLETE)
        return unchanged()

    if isinstance(event, LogoutRequested):
        return to(SessionState.LOGGED_OUT, Effect.CLEAR_IDENTITY)
    return unchanged()
