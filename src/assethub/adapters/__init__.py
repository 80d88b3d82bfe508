"""Adapters module - backend implementations of StorageProvider."""

from assethub.adapters.factory import StorageProviderFactory
from assethub.adapters.storage import (
    FirebaseStorageProvider,
    LocalDirStorageProvider,
    MinIOStorageProvider,
)

__all__ = [
    "FirebaseStorageProvider",
    "LocalDirStorageProvider",
    "MinIOStorageProvider",
    "StorageProviderFactory",
]
