"""Roster: friend list indexing, search and team selection."""

from .models import ContactRecord, SortOrder
from .index import DEFAULT_BUCKET, RosterIndex, bucket_key
from .selection import MAX_SELECTION, SelectionSet
from .search import RosterSearch, filter_buckets
from .picker import CellInfo, ContactPicker, FriendRecord, FriendSource

__all__ = [
    "ContactRecord",
    "SortOrder",
    "DEFAULT_BUCKET",
    "RosterIndex",
    "bucket_key",
    "MAX_SELECTION",
    "SelectionSet",
    "RosterSearch",
    "filter_buckets",
    "CellInfo",
    "ContactPicker",
    "FriendRecord",
    "FriendSource",
]
