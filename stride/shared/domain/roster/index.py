"""Roster index: first-letter buckets for the indexed contact list.

Records arrive one at a time from the friend source, in any order. Each one is
appended to the bucket named by the first letter of the preferred name, or to
the ``#`` bucket when no letter is available. Buckets only grow; removing
entries requires an explicit :meth:`RosterIndex.clear` and re-ingestion.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from stride.shared.core.errors import MalformedRecord, UnknownIdentifier

from .models import ContactRecord, SortOrder

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "#"

Section = Tuple[str, List[ContactRecord]]


def bucket_key(record: ContactRecord, sort_order: SortOrder) -> str:
    """Derive the bucket key for a record.

    Raises:
        MalformedRecord: If the name field used by ``sort_order`` is empty
    """
    if sort_order is SortOrder.USER_DEFAULT:
        return DEFAULT_BUCKET

    if sort_order is SortOrder.GIVEN_NAME:
        field, name = "first_name", record.first_name
    else:
        field, name = "last_name", record.last_name

    name = name.strip()
    if not name:
        raise MalformedRecord(record.identifier, field)

    # upper() may expand ("ß" -> "SS"); only the first character names the bucket
    initial = name[0].upper()[0]
    return initial if initial.isalpha() else DEFAULT_BUCKET


def section_order(key: str) -> Tuple[bool, str]:
    """Sort key placing ``#`` after every letter.

    Plain string ordering would put ``#`` (U+0023) ahead of ``A`` (U+0041).
    """
    return (key == DEFAULT_BUCKET, key)


class RosterIndex:
    """Accumulates contact records into ordered first-letter buckets.

    Not thread-safe: all ingestion must happen on a single task or thread.
    """

    def __init__(self) -> None:
        self._buckets: Dict[str, List[ContactRecord]] = {}
        self._records: Dict[str, ContactRecord] = {}
        self._entries = 0

    def ingest(self, record: ContactRecord, sort_order: SortOrder) -> str:
        """Append a record to its bucket.

        Not idempotent: ingesting the same identifier twice lists it twice.

        Returns:
            The bucket key the record was placed in
        """
        try:
            key = bucket_key(record, sort_order)
        except MalformedRecord as exc:
            logger.warning(f"RosterIndex: {exc}; filing under '{DEFAULT_BUCKET}'")
            key = DEFAULT_BUCKET

        self._buckets.setdefault(key, []).append(record)
        self._records[record.identifier] = record
        self._entries += 1
        logger.debug(f"RosterIndex: ingested {record.identifier} into '{key}'")
        return key

    def keys(self) -> List[str]:
        """Bucket keys in display order (section index titles)."""
        return sorted(self._buckets, key=section_order)

    def identifiers_in(self, key: str) -> List[str]:
        return [record.identifier for record in self._buckets.get(key, [])]

    def buckets(self) -> List[Section]:
        """All buckets in display order with their records in insertion order."""
        return [(key, list(self._buckets[key])) for key in self.keys()]

    def record_for(self, identifier: str) -> Optional[ContactRecord]:
        """Most recently ingested record for an identifier."""
        return self._records.get(identifier)

    def require(self, identifier: str) -> ContactRecord:
        """Like :meth:`record_for`, but raises for identifiers never ingested."""
        record = self._records.get(identifier)
        if record is None:
            raise UnknownIdentifier(identifier)
        return record

    def clear(self) -> None:
        self._buckets.clear()
        self._records.clear()
        self._entries = 0

    @property
    def is_empty(self) -> bool:
        return self._entries == 0

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __len__(self) -> int:
        """Total bucket entries, counting repeated ingestion."""
        return self._entries
