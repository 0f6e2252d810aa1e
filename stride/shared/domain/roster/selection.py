"""Bounded multi-selection of roster entries."""

from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, Iterator, Optional

from stride.shared.core.errors import SelectionCapacityExceeded

logger = logging.getLogger(__name__)

# Team size limit
MAX_SELECTION = 11


class SelectionSet:
    """Duplicate-free set of contact identifiers with a hard cap.

    The cap is enforced when a member is added so the twelfth tap can be
    rejected immediately. Only distinct current members count towards it.
    """

    def __init__(
        self,
        limit: int = MAX_SELECTION,
        is_known: Optional[Callable[[str], bool]] = None,
    ) -> None:
        if limit < 1:
            raise ValueError(f"Selection limit must be positive, got {limit}")
        self.limit = limit
        self._is_known = is_known
        # dict keeps tap order for logging; membership is what matters
        self._members: Dict[str, None] = {}

    def select(self, identifier: str) -> None:
        """Add a member.

        Already-selected identifiers are accepted without change. Identifiers
        rejected by ``is_known`` are ignored.

        Raises:
            SelectionCapacityExceeded: If the set is full and ``identifier`` is new
        """
        if identifier in self._members:
            return
        if self._is_known is not None and not self._is_known(identifier):
            logger.warning(f"SelectionSet: ignoring unknown identifier {identifier}")
            return
        if len(self._members) >= self.limit:
            raise SelectionCapacityExceeded(self.limit)
        self._members[identifier] = None

    def deselect(self, identifier: str) -> None:
        self._members.pop(identifier, None)

    def contains(self, identifier: str) -> bool:
        return identifier in self._members

    def all(self) -> FrozenSet[str]:
        return frozenset(self._members)

    def clear(self) -> None:
        self._members.clear()

    @property
    def is_full(self) -> bool:
        return len(self._members) >= self.limit

    @property
    def remaining(self) -> int:
        return self.limit - len(self._members)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)
