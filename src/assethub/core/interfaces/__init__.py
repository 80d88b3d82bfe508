"""Core interfaces for storage backends."""

from assethub.core.interfaces.storage import StorageProvider

__all__ = [
    "StorageProvider",
]
