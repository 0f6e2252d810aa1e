"""Application Shell State.

Replaces a global app controller: the shell state is built around an explicit
:class:`SessionContext` and follows it through the event bus, so the
presentation layer only ever reads ``screen`` and ``notices``.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Any, Deque, Dict, List

from stride.shared.core import events
from stride.shared.core.event_bus import EventBus, EventPayload
from stride.shared.domain.session import ScreenId, SessionContext

MAX_LOG_ENTRIES = 500


class AppState:
    """State for the application shell.

    Holds the visible top-level screen, user-visible notices (alerts) and a
    circular log buffer. It is updated only from EventBus events.
    """

    def __init__(self, event_bus: EventBus, session: SessionContext) -> None:
        """Initialize application state.

        Args:
            event_bus: The shared event bus
            session: The session this shell presents
        """
        self.bus = event_bus
        self.session = session

        self.screen: ScreenId = session.screen
        self.notices: List[Dict[str, Any]] = []
        self.logs: Deque[Dict[str, Any]] = deque(maxlen=MAX_LOG_ENTRIES)

        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus topics. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_SESSION_CHANGED, self._handle_session_changed)
        await self.bus.subscribe(events.TOPIC_SESSION_NOTICE, self._handle_notice)
        await self.bus.subscribe(events.TOPIC_SELECTION_REJECTED, self._handle_selection_rejected)
        await self.bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_log)

        self._started = True

    # --- Public Actions ---

    def dismiss_notices(self) -> None:
        self.notices.clear()

    async def push_log(self, message: str, level: str = "info") -> None:
        """Publish a log entry; the handler appends it to the buffer."""
        await self.bus.publish(events.TOPIC_LOGS_EVENT, events.create_logs_event(message, level))

    # --- Event Handlers ---

    async def _handle_session_changed(self, payload: EventPayload) -> None:
        screen = payload.get("screen")
        if screen:
            self.screen = ScreenId(screen)

    async def _handle_notice(self, payload: EventPayload) -> None:
        self.notices.append({
            "kind": payload.get("kind"),
            "message": payload.get("message", ""),
            "ts": time.time(),
        })

    async def _handle_selection_rejected(self, payload: EventPayload) -> None:
        limit = payload.get("limit")
        self.notices.append({
            "kind": "selection_limit",
            "message": f"You are limited to {limit} members",
            "ts": time.time(),
        })

    async def _handle_log(self, payload: EventPayload) -> None:
        self.logs.append(payload)
