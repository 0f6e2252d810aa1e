"""Session: launch decision, login/onboarding/logout flow, screen routing."""

from .state import (
    Effect,
    HealthCheckFailed,
    HealthCheckSucceeded,
    LoginCancelled,
    LoginFailed,
    LoginSucceeded,
    LogoutRequested,
    OnboardingFinished,
    SessionEvent,
    SessionSnapshot,
    SessionState,
    Transition,
    initial_snapshot,
    transition,
)
from .router import ScreenId, route
from .machine import HealthProbe, ParticipantService, SessionContext

__all__ = [
    "Effect",
    "HealthCheckFailed",
    "HealthCheckSucceeded",
    "LoginCancelled",
    "LoginFailed",
    "LoginSucceeded",
    "LogoutRequested",
    "OnboardingFinished",
    "SessionEvent",
    "SessionSnapshot",
    "SessionState",
    "Transition",
    "initial_snapshot",
    "transition",
    "ScreenId",
    "route",
    "HealthProbe",
    "ParticipantService",
    "SessionContext",
]
