"""Stride package."""

from .shared.core.event_bus import EventBus
from .shared.domain.session import SessionContext, ScreenId, route
from .shared.domain.roster import ContactPicker

__all__ = ["EventBus", "SessionContext", "ScreenId", "route", "ContactPicker"]
