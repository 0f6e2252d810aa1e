"""Search overlay for the contact picker."""

from __future__ import annotations

from typing import List

from .index import RosterIndex, Section
from .models import ContactRecord


def _matches(record: ContactRecord, needle: str) -> bool:
    return any(
        needle in value.casefold()
        for value in (record.display_name, record.first_name, record.last_name)
    )


def filter_buckets(index: RosterIndex, query: str) -> List[Section]:
    """Filter the index by a case-insensitive name query.

    Bucket order and per-bucket order are preserved; buckets left empty are
    dropped. A blank query returns every bucket.
    """
    needle = query.strip().casefold()
    sections = index.buckets()
    if not needle:
        return sections

    filtered: List[Section] = []
    for key, records in sections:
        kept = [record for record in records if _matches(record, needle)]
        if kept:
            filtered.append((key, kept))
    return filtered


class RosterSearch:
    """Holds the current search query over a roster index.

    The overlay is read-only with respect to the index and never touches the
    selection.
    """

    def __init__(self, index: RosterIndex) -> None:
        self._index = index
        self.query = ""

    @property
    def is_active(self) -> bool:
        return bool(self.query.strip())

    def update(self, query: str) -> None:
        self.query = query

    def clear(self) -> None:
        self.query = ""

    def sections(self) -> List[Section]:
        return filter_buckets(self._index, self.query)
