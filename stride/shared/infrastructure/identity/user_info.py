"""Stored identity and onboarding facts read by the session."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class UserInfoStore(Protocol):
    """Key/value facts owned outside the session state machine."""

    @property
    def identity(self) -> Optional[str]:
        ...

    @property
    def onboarding_complete(self) -> bool:
        ...

    def set_identity(self, identity: str) -> None:
        ...

    def clear_identity(self) -> None:
        ...

    def mark_onboarding_complete(self) -> None:
        ...


class InMemoryUserInfo:
    """Process-local user info."""

    def __init__(self, identity: Optional[str] = None, onboarding_complete: bool = False) -> None:
        self._identity = identity or None
        self._onboarding_complete = onboarding_complete

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def onboarding_complete(self) -> bool:
        return self._onboarding_complete

    def set_identity(self, identity: str) -> None:
        self._identity = identity or None

    def clear_identity(self) -> None:
        logger.debug("UserInfo: identity cleared")
        self._identity = None

    def mark_onboarding_complete(self) -> None:
        self._onboarding_complete = True
