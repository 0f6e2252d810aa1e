"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (backend service, stored user info).
"""

# Backend
from stride.shared.infrastructure.causes.client import CausesClient

# Identity
from stride.shared.infrastructure.identity.user_info import InMemoryUserInfo, UserInfoStore

__all__ = [
    # Backend
    "CausesClient",
    # Identity
    "InMemoryUserInfo",
    "UserInfoStore",
]
