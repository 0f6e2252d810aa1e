"""
Shared Domain Module
====================

Business logic for the roster picker and the session flow.
"""

# Roster
from stride.shared.domain.roster import ContactPicker, RosterIndex, SelectionSet

# Session
from stride.shared.domain.session import SessionContext, SessionState, ScreenId, route

__all__ = [
    # Roster
    "ContactPicker",
    "RosterIndex",
    "SelectionSet",
    # Session
    "SessionContext",
    "SessionState",
    "ScreenId",
    "route",
]
