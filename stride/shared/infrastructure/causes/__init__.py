from .client import CausesClient

__all__ = ["CausesClient"]
