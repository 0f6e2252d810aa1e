"""Roster data model: contact records and name sort order."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOrder(Enum):
    """Which name the device prefers for ordering contacts."""
    GIVEN_NAME = "givenName"
    FAMILY_NAME = "familyName"
    NONE = "none"                # unspecified, treated as family name
    USER_DEFAULT = "userDefault" # no deterministic name ordering


class ContactRecord(BaseModel):
    """One candidate team member as delivered by the friend source."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    identifier: str = Field(min_length=1, description="Opaque unique id")
    display_name: str = Field(min_length=1)
    first_name: str = ""
    last_name: str = ""
    picture_ref: str = Field(default="", description="Opaque picture reference, never resolved here")
