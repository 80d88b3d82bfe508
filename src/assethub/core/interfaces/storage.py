"""Storage provider interface for blob and asset operations."""

import logging
from abc import ABC, abstractmethod

from assethub.core.errors import ContainerMissingError
from assethub.core.models import (
    Asset,
    AssetType,
    BackendKind,
    ContainerAddress,
    StorageProviderOptions,
    StorageType,
)
from assethub.core.paths import get_file_name
from assethub.infra.http import encode_text
from assethub.logging_schema import LogEvent
from assethub.services.assets import AssetClassifier, AssetService

logger = logging.getLogger(__name__)


class StorageProvider(ABC):
    """Interface for storage operations.

    Implementations: FirebaseStorageProvider, MinIOStorageProvider,
    LocalDirStorageProvider

    Blob names are relative to the configured container. Listings are
    normalized to the same relative form, so a listed name can be passed
    straight back to read/write/delete.
    """

    def __init__(
        self,
        options: StorageProviderOptions,
        classifier: AssetClassifier | None = None,
    ) -> None:
        self._options = options
        self._classifier = classifier or AssetService.create_asset_from_file_path

    @property
    @abstractmethod
    def backend_kind(self) -> BackendKind:
        """Return the backend identifier."""
        ...

    @property
    @abstractmethod
    def storage_type(self) -> StorageType:
        """Return where the backend keeps its data."""
        ...

    @property
    def options(self) -> StorageProviderOptions:
        return self._options

    @property
    def container(self) -> ContainerAddress:
        return ContainerAddress(name=self._options.folder_name, backend_kind=self.backend_kind)

    async def initialize(self) -> None:
        """Create the configured container, or check that it exists.

        Existence is judged by listing: a container with zero entries is
        treated as missing, even if the backend holds it empty.

        Raises:
            ContainerMissingError: Listing was empty and create_folder is off
        """
        folder_name = self._options.folder_name
        if self._options.create_folder:
            await self.create_container(folder_name)
        else:
            files = await self.list_files(folder_name)
            if not files:
                logger.error(
                    "Container does not exist",
                    extra={
                        "event": LogEvent.CONTAINER_MISSING,
                        "backend": self.backend_kind,
                        "container": folder_name,
                    },
                )
                raise ContainerMissingError(folder_name)

        logger.info(
            "Storage provider initialized",
            extra={
                "event": LogEvent.PROVIDER_INITIALIZED,
                "backend": self.backend_kind,
                "container": folder_name,
                "created": self._options.create_folder,
            },
        )

    @abstractmethod
    async def read_text(self, blob_name: str) -> str:
        """Read a blob as UTF-8 text.

        Args:
            blob_name: Name of blob in container

        Raises:
            BlobNotFoundError: Blob does not exist
            NetworkError: Transport failure
        """
        ...

    async def read_binary(self, blob_name: str) -> bytes:
        """Read a blob as bytes.

        Fallback relays through read_text, which is only byte-exact for
        UTF-8 content. Adapters with a native binary path override this.
        """
        return encode_text(await self.read_text(blob_name))

    @abstractmethod
    async def write_text(self, blob_name: str, content: str) -> None:
        """Create or overwrite a blob with text content."""
        ...

    @abstractmethod
    async def write_binary(self, blob_name: str, content: bytes) -> None:
        """Create or overwrite a blob with raw bytes."""
        ...

    @abstractmethod
    async def delete_file(self, blob_name: str) -> None:
        """Delete a blob.

        Deleting a missing blob may or may not raise BlobNotFoundError
        depending on the backend.
        """
        ...

    @abstractmethod
    async def list_files(self, container_name: str, ext: str | None = None) -> list[str]:
        """List blobs in a container.

        Args:
            container_name: Container to list
            ext: Suffix filter (e.g. ".png"); all entries when omitted

        Returns:
            Container-relative blob names, in backend order
        """
        ...

    @abstractmethod
    async def list_containers(self, path: str | None = None) -> list[str]:
        """List containers visible to the account.

        May be empty where the backend does not expose enumeration.
        """
        ...

    @abstractmethod
    async def create_container(self, name: str) -> None:
        """Create a container. Idempotent: an existing container is success."""
        ...

    @abstractmethod
    async def delete_container(self, name: str) -> None:
        """Delete a container. Best effort: failures are logged, not raised."""
        ...

    @abstractmethod
    async def resolve_url(self, container_name: str, blob_name: str) -> str:
        """Resolve a blob to a URL fetchable outside this provider."""
        ...

    async def get_assets(self, folder_name: str | None = None) -> list[Asset]:
        """Retrieve classified assets from a container.

        Lists the container, resolves every entry to a URL and classifies
        it. Unknown assets are dropped; the rest keep listing order. The
        first listing or resolution failure aborts the call.

        Args:
            folder_name: Container to read; configured container when omitted
        """
        folder_name = folder_name or self._options.folder_name
        files = await self.list_files(folder_name)

        assets: list[Asset] = []
        for blob_name in files:
            url = await self.resolve_url(folder_name, blob_name)
            asset = self._classifier(url, self.get_file_name(blob_name))
            if asset.type == AssetType.UNKNOWN:
                logger.debug(
                    "Skipping unknown asset",
                    extra={"event": LogEvent.ASSET_SKIPPED, "container": folder_name, "blob": blob_name},
                )
                continue
            assets.append(asset)

        logger.info(
            "Assets resolved",
            extra={
                "event": LogEvent.ASSETS_RESOLVED,
                "backend": self.backend_kind,
                "container": folder_name,
                "listed": len(files),
                "assets": len(assets),
            },
        )
        return assets

    def get_file_name(self, url: str) -> str:
        """Last path segment of a URL or key, query string removed."""
        return get_file_name(url)
