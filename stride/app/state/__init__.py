"""Shell state management.

Architecture:
- AppState: visible screen, notices and log buffer, driven by EventBus events
"""

from .app_state import AppState

__all__ = ["AppState"]
