"""Session context: the single writer of session state.

Feeds events into the pure transition function, carries out the side effects
it requests through injected collaborators, and tells the presentation layer
about state changes and notices over the event bus. Constructed explicitly at
startup and passed to every consumer.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Deque, Optional, Protocol

from stride.shared.core import events
from stride.shared.core.event_bus import EventBus
from stride.shared.infrastructure.identity.user_info import UserInfoStore

from .router import ScreenId, route
from .state import (
    Effect,
    HealthCheckFailed,
    HealthCheckSucceeded,
    LoginSucceeded,
    SessionEvent,
    SessionSnapshot,
    SessionState,
    event_name,
    initial_snapshot,
    transition,
)

logger = logging.getLogger(__name__)

MAX_HISTORY = 100

CONNECTIVITY_MESSAGE = "Unable to connect to the server. Please try again later."


class HealthProbe(Protocol):
    async def perform_health_check(self) -> bool:
        ...


class ParticipantService(Protocol):
    async def create_participant(self, identity: str) -> bool:
        ...


class SessionContext:
    """Owns the session snapshot for the lifetime of the process."""

    def __init__(
        self,
        event_bus: EventBus,
        user_info: UserInfoStore,
        health_probe: Optional[HealthProbe] = None,
        participants: Optional[ParticipantService] = None,
        health_check_enabled: bool = True,
    ) -> None:
        self.event_bus = event_bus
        self.user_info = user_info
        self.health_probe = health_probe
        self.participants = participants
        self.health_check_enabled = health_check_enabled

        self._snapshot = SessionSnapshot(SessionState.LOGGED_OUT)
        self._launched = False
        self._background: set[asyncio.Task] = set()
        self.history: Deque[SessionState] = deque([self._snapshot.state], maxlen=MAX_HISTORY)

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> SessionState:
        return self._snapshot.state

    @property
    def screen(self) -> ScreenId:
        return route(self._snapshot.state)

    async def launch(self) -> SessionState:
        """Resolve the initial state and run the launch health probe once."""
        if self._launched:
            logger.warning("SessionContext: launch() called twice, ignoring")
            return self.state
        self._launched = True

        has_identity = bool(self.user_info.identity)
        probe = self.health_check_enabled and self.health_probe is not None
        previous = self._snapshot
        self._snapshot = initial_snapshot(has_identity, health_check_enabled=probe)
        self.history = deque([self._snapshot.state], maxlen=MAX_HISTORY)
        logger.info(
            f"SessionContext: launched into {self.state.value} "
            f"(identity={'yes' if has_identity else 'no'}, probe={'yes' if self._snapshot.health_check_pending else 'no'})"
        )
        await self._publish_change(previous.state, "Launch")

        if self._snapshot.health_check_pending:
            assert self.health_probe is not None
            try:
                reachable = await self.health_probe.perform_health_check()
            except Exception as exc:
                logger.warning(f"SessionContext: health probe raised, treating as failure: {exc}")
                reachable = False
            await self.dispatch(HealthCheckSucceeded() if reachable else HealthCheckFailed())

        return self.state

    async def login(self, identity: str) -> SessionState:
        """Record the identity returned by the login provider and dispatch LoginSucceeded.

        The identity is only stored while logged out; a login reported during a
        live session is ignored along with its event.
        """
        if self.state is not SessionState.LOGGED_OUT:
            logger.warning(f"SessionContext: login ignored in {self.state.value}")
            return self.state
        self.user_info.set_identity(identity)
        return await self.dispatch(LoginSucceeded())

    async def dispatch(self, event: SessionEvent) -> SessionState:
        """Apply one event. Events that do not apply to the current state are ignored."""
        result = transition(self._snapshot, event, self.user_info.onboarding_complete)
        self._snapshot = result.snapshot
        name = event_name(event)

        if result.changed:
            self.history.append(self.state)
            logger.info(f"SessionContext: {result.previous.state.value} -> {self.state.value} on {name}")
            await self._publish_change(result.previous.state, name)
        elif not result.effects:
            logger.debug(f"SessionContext: {name} ignored in {self.state.value}")

        for effect in result.effects:
            await self._apply(effect, event)

        return self.state

    async def _publish_change(self, previous: SessionState, cause: str) -> None:
        await self.event_bus.publish(
            events.TOPIC_SESSION_CHANGED,
            events.create_session_changed_event(
                previous=previous.value,
                state=self.state.value,
                screen=self.screen.value,
                event=cause,
            ),
        )

    async def _apply(self, effect: Effect, event: SessionEvent) -> None:
        if effect is Effect.NOTIFY_CONNECTIVITY:
            await self.event_bus.publish(
                events.TOPIC_SESSION_NOTICE,
                events.create_notice_event(events.NOTICE_CONNECTIVITY, CONNECTIVITY_MESSAGE),
            )
        elif effect is Effect.NOTIFY_LOGIN_FAILED:
            reason = getattr(event, "reason", "")
            await self.event_bus.publish(
                events.TOPIC_SESSION_NOTICE,
                events.create_notice_event(events.NOTICE_LOGIN_FAILED, f"Error logging in {reason}".strip()),
            )
        elif effect is Effect.PERSIST_ONBOARDING_COMPLETE:
            self.user_info.mark_onboarding_complete()
        elif effect is Effect.CLEAR_IDENTITY:
            self.user_info.clear_identity()
        elif effect is Effect.CREATE_PARTICIPANT:
            await self._start_participant_creation()

    async def _start_participant_creation(self) -> None:
        identity = self.user_info.identity
        if not identity:
            logger.warning("SessionContext: no identity available for participant creation")
            return

        await self.event_bus.publish(
            events.TOPIC_PARTICIPANT_CREATE,
            events.create_participant_event(identity),
        )
        if self.participants is None:
            return

        # Fire-and-forget: the outcome never feeds back into the state machine
        task = asyncio.create_task(self._create_participant(identity))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _create_participant(self, identity: str) -> None:
        assert self.participants is not None
        try:
            created = await self.participants.create_participant(identity)
        except Exception as exc:
            logger.warning(f"SessionContext: participant creation raised for {identity}: {exc}")
            return
        if not created:
            logger.warning(f"SessionContext: participant creation failed for {identity}")

    async def wait_for_background(self) -> None:
        """Wait for outstanding fire-and-forget work (participant creation)."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
