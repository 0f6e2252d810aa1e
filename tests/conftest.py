"""Shared fixtures for the Stride test suite."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pytest

from stride.shared.core.event_bus import EventBus, EventPayload
from stride.shared.domain.roster import ContactRecord, FriendRecord
from stride.shared.infrastructure.identity import InMemoryUserInfo


def contact(identifier: str, first: str = "", last: str = "", name: str | None = None) -> ContactRecord:
    return ContactRecord(
        identifier=identifier,
        display_name=name or f"{first} {last}".strip() or identifier,
        first_name=first,
        last_name=last,
        picture_ref=f"https://example.test/{identifier}.png",
    )


class FakeFriendSource:
    """Delivers a fixed list of friends; counts how often it was asked."""

    def __init__(self, friends: Iterable[FriendRecord]) -> None:
        self.friends = list(friends)
        self.calls = 0

    async def taggable_friends(self):
        self.calls += 1
        for friend in self.friends:
            yield friend


class Recorder:
    """Collects payloads published on EventBus topics."""

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self.seen: Dict[str, List[EventPayload]] = {}

    async def listen(self, *topics: str) -> None:
        for topic in topics:
            self.seen.setdefault(topic, [])

            async def handler(payload: EventPayload, _topic: str = topic) -> None:
                self.seen[_topic].append(payload)

            await self.bus.subscribe(topic, handler)

    def __getitem__(self, topic: str) -> List[EventPayload]:
        return self.seen.get(topic, [])


class FakeCauses:
    """Stand-in for the backend: scripted health result, recorded participants."""

    def __init__(self, healthy: bool = True, raises: Exception | None = None) -> None:
        self.healthy = healthy
        self.raises = raises
        self.health_checks = 0
        self.participants: List[str] = []

    async def perform_health_check(self) -> bool:
        self.health_checks += 1
        if self.raises is not None:
            raise self.raises
        return self.healthy

    async def create_participant(self, identity: str) -> bool:
        self.participants.append(identity)
        return True


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus: EventBus) -> Recorder:
    return Recorder(bus)


@pytest.fixture
def user_info() -> InMemoryUserInfo:
    return InMemoryUserInfo()


@pytest.fixture
def friends() -> List[FriendRecord]:
    rows: List[Dict[str, Any]] = [
        {"fbid": "1", "display_name": "Zoe Adams", "first_name": "Zoe", "last_name": "Adams"},
        {"fbid": "2", "display_name": "Amir Baker", "first_name": "Amir", "last_name": "Baker"},
        {"fbid": "3", "display_name": "Bea Abbott", "first_name": "Bea", "last_name": "Abbott"},
        {"fbid": "4", "display_name": "Prince", "first_name": "Prince", "last_name": ""},
        {"fbid": "5", "display_name": "Cleo Zhang", "first_name": "Cleo", "last_name": "Zhang"},
    ]
    return [FriendRecord(**row, picture_url=f"https://example.test/{row['fbid']}.png") for row in rows]


@pytest.fixture
def make_contact():
    return contact


@pytest.fixture
def friend_source(friends: List[FriendRecord]) -> FakeFriendSource:
    return FakeFriendSource(friends)


@pytest.fixture
def make_source():
    return FakeFriendSource


@pytest.fixture
def make_causes():
    return FakeCauses
