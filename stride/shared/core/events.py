"""Canonical event definitions for Stride."""

from __future__ import annotations

from typing import Iterable, Literal

from .event_bus import EventPayload

# Session lifecycle
TOPIC_SESSION_CHANGED = "session.changed"
TOPIC_SESSION_NOTICE = "session.notice"
TOPIC_PARTICIPANT_CREATE = "participant.create"

# Roster / contact picker
TOPIC_ROSTER_UPDATED = "roster.updated"
TOPIC_SELECTION_CHANGED = "roster.selection.changed"
TOPIC_SELECTION_REJECTED = "roster.selection.rejected"
TOPIC_TEAM_MEMBERS_SELECTED = "team.members.selected"

# Shell
TOPIC_LOGS_EVENT = "logs.event"

NOTICE_CONNECTIVITY = "connectivity"
NOTICE_LOGIN_FAILED = "login_failed"


def create_session_changed_event(
    previous: str,
    state: str,
    screen: str,
    event: str,
) -> EventPayload:
    """Create a session changed event.

    Args:
        previous: State before the transition
        state: State after the transition
        screen: Screen the presentation layer should show for ``state``
        event: Name of the event that caused the transition
    """
    return {
        "previous": previous,
        "state": state,
        "screen": screen,
        "event": event,
    }


def create_notice_event(
    kind: Literal["connectivity", "login_failed"],
    message: str,
) -> EventPayload:
    """Create a user-visible notice event."""
    return {
        "kind": kind,
        "message": message,
    }


def create_participant_event(identity: str) -> EventPayload:
    return {"identity": identity}


def create_roster_updated_event(identifier: str, bucket: str, total: int) -> EventPayload:
    """Create a roster updated event (one contact ingested)."""
    return {
        "identifier": identifier,
        "bucket": bucket,
        "total": total,
    }


def create_selection_changed_event(selected: Iterable[str], limit: int) -> EventPayload:
    members = sorted(selected)
    return {
        "selected": members,
        "count": len(members),
        "limit": limit,
    }


def create_selection_rejected_event(identifier: str, limit: int) -> EventPayload:
    return {
        "identifier": identifier,
        "limit": limit,
    }


def create_team_members_event(members: Iterable[str]) -> EventPayload:
    """Create the final team selection event handed to team creation."""
    return {"members": sorted(members)}


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a Log event."""
    import time

    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }
