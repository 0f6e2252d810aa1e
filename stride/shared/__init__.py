"""
Stride Shared Kernel
====================

Business logic and infrastructure shared by the Stride application shell.

Architecture:
- core: EventBus, configuration, errors
- infrastructure: Technical adapters (backend service, user info)
- domain: Business logic (roster picker, session flow)
"""

__version__ = "0.1.0"

__all__ = []
