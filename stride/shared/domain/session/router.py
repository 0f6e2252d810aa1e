"""Maps session state to the top-level screen."""

from __future__ import annotations

from enum import Enum

from .state import SessionState


class ScreenId(Enum):
    LOGIN = "Login"
    ONBOARDING = "Onboarding"
    MAIN_NAVIGATION = "MainNavigation"


_SCREENS = {
    SessionState.LOGGED_OUT: ScreenId.LOGIN,
    SessionState.ONBOARDING: ScreenId.ONBOARDING,
    SessionState.ACTIVE: ScreenId.MAIN_NAVIGATION,
}


def route(state: SessionState) -> ScreenId:
    return _SCREENS[state]
