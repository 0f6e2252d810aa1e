"""Contact Picker data source.

Backs the team-member picker: loads taggable friends into a :class:`RosterIndex`,
answers the indexed list's section/row questions through the search overlay,
and routes taps into the bounded :class:`SelectionSet`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, FrozenSet, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from stride.shared.core import events
from stride.shared.core.configuration import ReloadPolicy, RosterConfig
from stride.shared.core.errors import SelectionCapacityExceeded
from stride.shared.core.event_bus import EventBus

from .index import RosterIndex, Section
from .models import ContactRecord, SortOrder
from .search import RosterSearch
from .selection import MAX_SELECTION, SelectionSet

logger = logging.getLogger(__name__)


class FriendRecord(BaseModel):
    """A friend as delivered by the social graph's taggable-friends listing."""
    model_config = ConfigDict(frozen=True)

    fbid: str
    display_name: str
    first_name: str = ""
    last_name: str = ""
    picture_url: str = ""

    def to_contact(self) -> ContactRecord:
        return ContactRecord(
            identifier=self.fbid,
            display_name=self.display_name,
            first_name=self.first_name,
            last_name=self.last_name,
            picture_ref=self.picture_url,
        )


class FriendSource(Protocol):
    """Push-style source of taggable friends."""

    def taggable_friends(self) -> AsyncIterator[FriendRecord]:
        ...


@dataclass(frozen=True)
class CellInfo:
    """What a picker row needs to render one contact."""
    identifier: str
    name: str
    picture: str
    selected: bool


class ContactPicker:
    """Indexed, searchable friend list with a capped team selection."""

    def __init__(
        self,
        event_bus: EventBus,
        sort_order: SortOrder = SortOrder.FAMILY_NAME,
        limit: int = MAX_SELECTION,
        reload_policy: ReloadPolicy = "skip_if_loaded",
    ) -> None:
        self.event_bus = event_bus
        self.sort_order = sort_order
        self.reload_policy = reload_policy
        self.index = RosterIndex()
        self.selection = SelectionSet(limit=limit, is_known=self.index.__contains__)
        self.search = RosterSearch(self.index)
        self._reload_lock = asyncio.Lock()

    @classmethod
    def from_config(cls, event_bus: EventBus, config: RosterConfig) -> "ContactPicker":
        return cls(
            event_bus,
            sort_order=SortOrder(config.default_sort_order),
            limit=config.max_selection,
            reload_policy=config.reload_policy,
        )

    # --- Loading ---

    async def reload(self, source: FriendSource) -> int:
        """Load friends from ``source`` according to the reload policy.

        ``skip_if_loaded`` leaves a populated roster untouched; ``rebuild``
        clears the roster and the selection before re-ingesting. Overlapping
        calls run one after another.

        Returns:
            Number of records ingested
        """
        async with self._reload_lock:
            return await self._reload(source)

    async def _reload(self, source: FriendSource) -> int:
        if not self.index.is_empty:
            if self.reload_policy == "skip_if_loaded":
                logger.debug("ContactPicker: roster already loaded, skipping reload")
                return 0
            logger.info("ContactPicker: rebuilding roster")
            self.index.clear()
            if len(self.selection):
                self.selection.clear()
                await self._publish_selection()

        count = 0
        async for friend in source.taggable_friends():
            key = self.index.ingest(friend.to_contact(), self.sort_order)
            count += 1
            await self.event_bus.publish(
                events.TOPIC_ROSTER_UPDATED,
                events.create_roster_updated_event(friend.fbid, key, len(self.index)),
            )

        logger.info(f"ContactPicker: loaded {count} friend(s) into {len(self.index.keys())} section(s)")
        return count

    # --- Indexed list ---

    def _sections(self) -> List[Section]:
        return self.search.sections()

    def section_titles(self) -> List[str]:
        return [key for key, _ in self._sections()]

    def number_of_sections(self) -> int:
        return len(self._sections())

    def title_for_section(self, section: int) -> Optional[str]:
        sections = self._sections()
        if 0 <= section < len(sections):
            return sections[section][0]
        return None

    def number_of_rows(self, section: int) -> int:
        sections = self._sections()
        if 0 <= section < len(sections):
            return len(sections[section][1])
        return 0

    def contact_at(self, section: int, row: int) -> Optional[str]:
        """Identifier shown at a position, or None when out of range."""
        sections = self._sections()
        if not 0 <= section < len(sections):
            return None
        records = sections[section][1]
        if not 0 <= row < len(records):
            return None
        return records[row].identifier

    def cell_info(self, identifier: str) -> Optional[CellInfo]:
        record = self.index.record_for(identifier)
        if record is None:
            return None
        return CellInfo(
            identifier=record.identifier,
            name=record.display_name,
            picture=record.picture_ref,
            selected=identifier in self.selection,
        )

    def set_query(self, query: str) -> None:
        self.search.update(query)

    # --- Selection ---

    async def toggle(self, section: int, row: int) -> Optional[bool]:
        """Flip selection of the contact at a position.

        Returns:
            New membership, or None if the position is empty or the tap was
            rejected because the team is full
        """
        identifier = self.contact_at(section, row)
        if identifier is None:
            return None
        if identifier in self.selection:
            await self.deselect(identifier)
            return False
        return await self.select(identifier)

    async def select(self, identifier: str) -> Optional[bool]:
        try:
            self.selection.select(identifier)
        except SelectionCapacityExceeded as exc:
            logger.info(f"ContactPicker: rejected {identifier}: {exc}")
            await self.event_bus.publish(
                events.TOPIC_SELECTION_REJECTED,
                events.create_selection_rejected_event(identifier, exc.limit),
            )
            return None

        selected = identifier in self.selection
        if selected:
            await self._publish_selection()
        return selected

    async def deselect(self, identifier: str) -> None:
        if identifier not in self.selection:
            return
        self.selection.deselect(identifier)
        await self._publish_selection()

    async def _publish_selection(self) -> None:
        await self.event_bus.publish(
            events.TOPIC_SELECTION_CHANGED,
            events.create_selection_changed_event(self.selection.all(), self.selection.limit),
        )

    # --- Completion ---

    async def done(self) -> FrozenSet[str]:
        """Hand the chosen members to team creation."""
        members = self.selection.all()
        await self.event_bus.publish(
            events.TOPIC_TEAM_MEMBERS_SELECTED,
            events.create_team_members_event(members),
        )
        logger.info(f"ContactPicker: team selection done with {len(members)} member(s)")
        return members

    def cancel(self) -> None:
        """Dismiss without submitting; the loaded roster and selection are kept."""
        logger.debug("ContactPicker: cancelled")
