"""Local directory storage provider for assethub.

Implements StorageProvider with one sub-directory of a root directory per
container. Reads are direct file reads; URLs are file:// URIs.
"""

import logging
import os
import shutil
from pathlib import Path

from assethub.core.errors import BackendError, BlobNotFoundError
from assethub.core.interfaces import StorageProvider
from assethub.core.models import BackendKind, StorageProviderOptions, StorageType
from assethub.core.paths import matches_extension
from assethub.infra.http import decode_text, encode_text
from assethub.logging_schema import LogEvent
from assethub.services.assets import AssetClassifier

logger = logging.getLogger(__name__)


class LocalDirStorageProvider(StorageProvider):
    """Storage provider using local directories."""

    def __init__(
        self,
        options: StorageProviderOptions,
        root: str | Path,
        classifier: AssetClassifier | None = None,
    ) -> None:
        """Initialize with the directory holding all containers.

        Args:
            options: Provider options; folder_name is a sub-directory of root
            root: Base directory
            classifier: Asset classifier for get_assets
        """
        super().__init__(options, classifier)
        self._root = Path(root).resolve()

    @property
    def backend_kind(self) -> BackendKind:
        return BackendKind.LOCAL_DIR

    @property
    def storage_type(self) -> StorageType:
        return StorageType.LOCAL

    def _container_path(self, name: str) -> Path:
        path = (self._root / name).resolve()
        if path == self._root or not path.is_relative_to(self._root):
            raise ValueError(f"Container name escapes storage root: {name!r}")
        return path

    def _blob_path(self, blob_name: str, container_name: str | None = None) -> Path:
        container = self._container_path(container_name or self._options.folder_name)
        path = (container / blob_name).resolve()
        if not path.is_relative_to(container) or path == container:
            raise ValueError(f"Blob name escapes container: {blob_name!r}")
        return path

    async def read_text(self, blob_name: str) -> str:
        return decode_text(await self.read_binary(blob_name))

    async def read_binary(self, blob_name: str) -> bytes:
        path = self._blob_path(blob_name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise BlobNotFoundError(f"Blob not found: {blob_name}") from e
        except OSError as e:
            raise BackendError(f"Reading {blob_name} failed: {e}") from e

    async def write_text(self, blob_name: str, content: str) -> None:
        await self.write_binary(blob_name, encode_text(content))

    async def write_binary(self, blob_name: str, content: bytes) -> None:
        path = self._blob_path(blob_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise BackendError(f"Writing {blob_name} failed: {e}") from e
        logger.debug(
            "Blob written",
            extra={"event": LogEvent.BLOB_WRITTEN, "path": str(path), "size": len(content)},
        )

    async def delete_file(self, blob_name: str) -> None:
        """Delete a file. A missing file is not an error."""
        path = self._blob_path(blob_name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise BackendError(f"Deleting {blob_name} failed: {e}") from e
        logger.debug(
            "Blob deleted",
            extra={"event": LogEvent.BLOB_DELETED, "path": str(path)},
        )

    async def list_files(self, container_name: str, ext: str | None = None) -> list[str]:
        """List files directly inside a container directory.

        A missing directory lists as empty. Names are sorted for a stable
        order.
        """
        path = self._container_path(container_name)
        if not path.is_dir():
            return []

        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries if entry.is_file())

        result = [name for name in names if matches_extension(name, ext)]
        logger.debug(
            "Listing complete",
            extra={
                "event": LogEvent.LISTING_COMPLETE,
                "path": str(path),
                "listed": len(names),
                "matched": len(result),
            },
        )
        return result

    async def list_containers(self, path: str | None = None) -> list[str]:
        """List container directories under the root.

        Args:
            path: Sub-directory of the root to list instead of the root
        """
        base = self._container_path(path) if path else self._root
        if not base.is_dir():
            return []
        with os.scandir(base) as entries:
            return sorted(entry.name for entry in entries if entry.is_dir())

    async def create_container(self, name: str) -> None:
        path = self._container_path(name)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendError(f"Creating container {name} failed: {e}") from e
        logger.info(
            "Container created",
            extra={"event": LogEvent.CONTAINER_CREATED, "path": str(path)},
        )

    async def delete_container(self, name: str) -> None:
        try:
            shutil.rmtree(self._container_path(name))
        except Exception as e:
            logger.warning(
                "Failed to delete container",
                extra={"event": LogEvent.CONTAINER_DELETE_FAILED, "container": name, "error": str(e)},
            )
            return
        logger.info(
            "Container deleted",
            extra={"event": LogEvent.CONTAINER_DELETED, "container": name},
        )

    async def resolve_url(self, container_name: str, blob_name: str) -> str:
        return self._blob_path(blob_name, container_name=container_name).as_uri()
