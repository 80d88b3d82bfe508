"""Storage provider factory.

Creates the adapter for a backend kind, wiring in the shared client
handles and backend configuration.
"""

import logging

from assethub.adapters.storage import (
    FirebaseStorageProvider,
    LocalDirStorageProvider,
    MinIOStorageProvider,
)
from assethub.core.interfaces import StorageProvider
from assethub.core.models import BackendKind, StorageProviderOptions
from assethub.infra.clients import StorageClients
from assethub.logging_schema import LogEvent
from assethub.services.assets import AssetClassifier

logger = logging.getLogger(__name__)


class StorageProviderFactory:
    """Factory for creating storage providers from shared clients."""

    def __init__(
        self,
        clients: StorageClients,
        classifier: AssetClassifier | None = None,
    ) -> None:
        self._clients = clients
        self._classifier = classifier

    async def create(
        self,
        options: StorageProviderOptions,
        kind: BackendKind | None = None,
    ) -> StorageProvider:
        """Create a provider for a backend kind.

        Args:
            options: Provider options. credentials, when set, select a
                dedicated client (access_key/secret_key for MinIO,
                credentials_file for Firebase).
            kind: Backend kind; configured default backend when omitted

        Returns:
            Uninitialized provider; call initialize() before use

        Raises:
            ValueError: Unsupported kind or incomplete credentials
        """
        config = self._clients.config
        kind = BackendKind(kind or config.default_backend)
        credentials = options.credentials or {}

        provider: StorageProvider
        if kind == BackendKind.MINIO:
            if credentials:
                try:
                    s3 = await self._clients.s3_for(credentials["access_key"], credentials["secret_key"])
                except KeyError as e:
                    raise ValueError(f"MinIO credentials require {e.args[0]!r}") from e
            else:
                s3 = self._clients.s3
            provider = MinIOStorageProvider(
                options,
                s3=s3,
                http=self._clients.http,
                presign_expiry_seconds=config.s3.presign_expiry_seconds,
                region=config.s3.region,
                classifier=self._classifier,
            )
        elif kind == BackendKind.FIREBASE:
            if credentials:
                try:
                    bucket = self._clients.bucket_for(credentials["credentials_file"])
                except KeyError as e:
                    raise ValueError(f"Firebase credentials require {e.args[0]!r}") from e
            else:
                bucket = self._clients.bucket
            provider = FirebaseStorageProvider(
                options,
                bucket=bucket,
                http=self._clients.http,
                url_expiry_seconds=config.firebase.url_expiry_seconds,
                classifier=self._classifier,
            )
        elif kind == BackendKind.LOCAL_DIR:
            provider = LocalDirStorageProvider(
                options,
                root=config.local.root,
                classifier=self._classifier,
            )
        else:
            raise ValueError(f"Unsupported storage backend: {kind}")

        logger.info(
            "Storage provider created",
            extra={"event": LogEvent.PROVIDER_CREATED, "backend": kind, "container": options.folder_name},
        )
        return provider
