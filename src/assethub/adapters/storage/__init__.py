"""Storage provider implementations, one per backend kind."""

from assethub.adapters.storage.firebase import FirebaseStorageProvider
from assethub.adapters.storage.local_dir import LocalDirStorageProvider
from assethub.adapters.storage.minio import MinIOStorageProvider

__all__ = [
    "FirebaseStorageProvider",
    "LocalDirStorageProvider",
    "MinIOStorageProvider",
]
