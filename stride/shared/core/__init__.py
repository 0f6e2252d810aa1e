"""
Shared Core Module
==================

Event system, configuration, and error types.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors
from .errors import (
    StrideError,
    MalformedRecord,
    SelectionCapacityExceeded,
    UnknownIdentifier,
    ConfigurationError,
)

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    RosterConfig,
    SessionConfig,
    ServiceConfig,
    LoggingConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "StrideError",
    "MalformedRecord",
    "SelectionCapacityExceeded",
    "UnknownIdentifier",
    "ConfigurationError",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "RosterConfig",
    "SessionConfig",
    "ServiceConfig",
    "LoggingConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
]
