"""Firebase Storage provider implementation.

A Firebase Storage bucket is a Google Cloud Storage bucket; containers are
folders (key prefixes) inside it. Folders exist only while they hold an
object, so creating a container writes a placeholder blob.

The google-cloud-storage SDK is synchronous. Calls run in worker threads,
and listings are pushed from the worker thread into a ListingCollector.
"""

import asyncio
import logging
from datetime import timedelta

import httpx
from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import TransportError
from google.cloud import storage

from assethub.core.errors import (
    BackendError,
    BlobNotFoundError,
    ContainerMissingError,
    NetworkError,
    StorageError,
)
from assethub.core.interfaces import StorageProvider
from assethub.core.models import BackendKind, StorageProviderOptions, StorageType
from assethub.core.paths import matches_extension, relative_key
from assethub.core.streams import ListingCollector
from assethub.infra.http import fetch_text
from assethub.logging_schema import LogEvent
from assethub.services.assets import AssetClassifier

logger = logging.getLogger(__name__)

# Objects needed to make an empty folder visible
PLACEHOLDER_BLOB = ".keep"
PLACEHOLDER_CONTENT = "temporary file to create directory"


def _translate(exc: Exception, target: str) -> StorageError:
    if isinstance(exc, NotFound):
        return BlobNotFoundError(f"Blob not found: {target}")
    if isinstance(exc, GoogleAPICallError):
        return BackendError(f"Firebase request failed for {target}: {exc.message}", status=exc.code)
    if isinstance(exc, TransportError):
        return NetworkError(f"Firebase request failed for {target}: {exc}")
    return BackendError(f"Firebase request failed for {target}: {exc}")


class FirebaseStorageProvider(StorageProvider):
    """Storage provider for a folder in a Firebase Storage bucket."""

    def __init__(
        self,
        options: StorageProviderOptions,
        bucket: storage.Bucket,
        http: httpx.AsyncClient,
        url_expiry_seconds: int = 3600,
        classifier: AssetClassifier | None = None,
    ) -> None:
        super().__init__(options, classifier)
        self._bucket = bucket
        self._http = http
        self._url_expiry = timedelta(seconds=url_expiry_seconds)

    @property
    def backend_kind(self) -> BackendKind:
        return BackendKind.FIREBASE

    @property
    def storage_type(self) -> StorageType:
        return StorageType.CLOUD

    def _blob(self, blob_name: str, container_name: str | None = None) -> storage.Blob:
        folder = (container_name or self._options.folder_name).strip("/")
        return self._bucket.blob(f"{folder}/{blob_name}")

    async def _call(self, target: str, func, *args, **kwargs):
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except (GoogleAPICallError, TransportError) as e:
            raise _translate(e, target) from e

    async def _signed_url(self, blob: storage.Blob) -> str:
        return await self._call(
            blob.name,
            blob.generate_signed_url,
            version="v4",
            expiration=self._url_expiry,
            method="GET",
        )

    async def read_text(self, blob_name: str) -> str:
        url = await self._signed_url(self._blob(blob_name))
        return await fetch_text(self._http, url)

    async def read_binary(self, blob_name: str) -> bytes:
        blob = self._blob(blob_name)
        return await self._call(blob.name, blob.download_as_bytes)

    async def write_text(self, blob_name: str, content: str) -> None:
        await self._upload(self._blob(blob_name), content, "text/plain; charset=utf-8")

    async def write_binary(self, blob_name: str, content: bytes) -> None:
        await self._upload(self._blob(blob_name), content, "application/octet-stream")

    async def _upload(self, blob: storage.Blob, data: str | bytes, content_type: str) -> None:
        await self._call(blob.name, blob.upload_from_string, data, content_type=content_type)
        logger.debug(
            "Blob written",
            extra={"event": LogEvent.BLOB_WRITTEN, "bucket": self._bucket.name, "key": blob.name},
        )

    async def delete_file(self, blob_name: str) -> None:
        """Delete a blob. A missing blob raises BlobNotFoundError."""
        blob = self._blob(blob_name)
        await self._call(blob.name, blob.delete)
        logger.debug(
            "Blob deleted",
            extra={"event": LogEvent.BLOB_DELETED, "bucket": self._bucket.name, "key": blob.name},
        )

    async def _list_names(self, prefix: str, delimiter: str | None = "/") -> list[str]:
        """List object names under prefix.

        The SDK pager is iterated in a worker thread that pushes each name
        into the collector on the event loop thread.
        """
        loop = asyncio.get_running_loop()
        collector: ListingCollector[str] = ListingCollector()

        def produce() -> None:
            try:
                for blob in self._bucket.list_blobs(prefix=prefix, delimiter=delimiter):
                    loop.call_soon_threadsafe(collector.push, blob.name)
            except NotFound:
                # The bucket itself is gone, so no folder in it exists
                loop.call_soon_threadsafe(collector.fail, ContainerMissingError(prefix.rstrip("/")))
            except Exception as e:
                loop.call_soon_threadsafe(collector.fail, _translate(e, prefix))
            else:
                loop.call_soon_threadsafe(collector.complete)

        await asyncio.to_thread(produce)
        return await collector.result()

    async def list_files(self, container_name: str, ext: str | None = None) -> list[str]:
        """List blobs directly under a folder.

        Names are returned relative to the folder. A folder with no objects
        lists as empty, which initialize() reports as missing.
        """
        folder = container_name.strip("/")
        names = await self._list_names(f"{folder}/")

        # Zero-byte "folder/" markers normalize to an empty key
        keys = [key for key in (relative_key(name, folder) for name in names) if key]
        result = [key for key in keys if matches_extension(key, ext)]
        logger.debug(
            "Listing complete",
            extra={
                "event": LogEvent.LISTING_COMPLETE,
                "bucket": self._bucket.name,
                "folder": folder,
                "listed": len(names),
                "matched": len(result),
            },
        )
        return result

    async def list_containers(self, path: str | None = None) -> list[str]:
        """Firebase does not expose container enumeration."""
        return []

    async def create_container(self, name: str) -> None:
        """Create a folder by writing a placeholder blob into it.

        Overwriting an existing placeholder is harmless, so this is
        idempotent.
        """
        blob = self._blob(PLACEHOLDER_BLOB, container_name=name)
        await self._call(blob.name, blob.upload_from_string, PLACEHOLDER_CONTENT, content_type="text/plain")
        logger.info(
            "Folder created",
            extra={"event": LogEvent.CONTAINER_CREATED, "bucket": self._bucket.name, "folder": name},
        )

    async def delete_container(self, name: str) -> None:
        """Delete every object under the folder."""
        folder = name.strip("/")
        try:
            names = await self._list_names(f"{folder}/", delimiter=None)
            await asyncio.to_thread(self._bucket.delete_blobs, [self._bucket.blob(n) for n in names])
        except Exception as e:
            logger.warning(
                "Failed to delete folder",
                extra={
                    "event": LogEvent.CONTAINER_DELETE_FAILED,
                    "bucket": self._bucket.name,
                    "folder": folder,
                    "error": str(e),
                },
            )
            return
        logger.info(
            "Folder deleted",
            extra={
                "event": LogEvent.CONTAINER_DELETED,
                "bucket": self._bucket.name,
                "folder": folder,
                "deleted": len(names),
            },
        )

    async def resolve_url(self, container_name: str, blob_name: str) -> str:
        return await self._signed_url(self._blob(blob_name, container_name=container_name))
