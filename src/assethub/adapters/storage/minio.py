"""MinIO storage provider implementation.

Containers are buckets and blob names are object keys. Keys returned by
list_objects_v2 are already bucket-relative, so listings need no prefix
stripping. Text reads go through a presigned GET URL; binary reads use
get_object directly.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import httpx

from assethub.core.errors import S3_ERRORS, ContainerConflictError, translate_client_error
from assethub.core.interfaces import StorageProvider
from assethub.core.models import BackendKind, StorageProviderOptions, StorageType
from assethub.core.paths import matches_extension
from assethub.core.streams import collect_listing
from assethub.infra.http import encode_text, fetch_text
from assethub.logging_schema import LogEvent
from assethub.services.assets import AssetClassifier

if TYPE_CHECKING:
    from types_aiobotocore_s3 import S3Client

logger = logging.getLogger(__name__)

# MinIO's default region; bucket creation elsewhere needs a location constraint
DEFAULT_REGION = "us-east-1"


class MinIOStorageProvider(StorageProvider):
    """Storage provider for a self-hosted S3-compatible bucket."""

    def __init__(
        self,
        options: StorageProviderOptions,
        s3: S3Client,
        http: httpx.AsyncClient,
        presign_expiry_seconds: int = 604800,
        region: str = DEFAULT_REGION,
        classifier: AssetClassifier | None = None,
    ) -> None:
        super().__init__(options, classifier)
        self._s3 = s3
        self._http = http
        self._presign_expiry = presign_expiry_seconds
        self._region = region

    @property
    def backend_kind(self) -> BackendKind:
        return BackendKind.MINIO

    @property
    def storage_type(self) -> StorageType:
        return StorageType.CLOUD

    @property
    def _bucket(self) -> str:
        return self._options.folder_name

    async def _presigned_get(self, bucket: str, key: str) -> str:
        try:
            return await self._s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=self._presign_expiry,
            )
        except S3_ERRORS as e:
            raise translate_client_error(e, bucket, key) from e

    async def read_text(self, blob_name: str) -> str:
        url = await self._presigned_get(self._bucket, blob_name)
        return await fetch_text(self._http, url)

    async def read_binary(self, blob_name: str) -> bytes:
        try:
            response = await self._s3.get_object(Bucket=self._bucket, Key=blob_name)
            return await response["Body"].read()
        except S3_ERRORS as e:
            raise translate_client_error(e, self._bucket, blob_name) from e

    async def write_text(self, blob_name: str, content: str) -> None:
        await self._put(blob_name, encode_text(content), "text/plain; charset=utf-8")

    async def write_binary(self, blob_name: str, content: bytes) -> None:
        await self._put(blob_name, content, "application/octet-stream")

    async def _put(self, blob_name: str, body: bytes, content_type: str) -> None:
        try:
            await self._s3.put_object(
                Bucket=self._bucket,
                Key=blob_name,
                Body=body,
                ContentType=content_type,
            )
        except S3_ERRORS as e:
            raise translate_client_error(e, self._bucket, blob_name) from e
        logger.debug(
            "Blob written",
            extra={"event": LogEvent.BLOB_WRITTEN, "bucket": self._bucket, "key": blob_name, "size": len(body)},
        )

    async def delete_file(self, blob_name: str) -> None:
        """Delete an object. S3 treats deleting a missing key as success."""
        try:
            await self._s3.delete_object(Bucket=self._bucket, Key=blob_name)
        except S3_ERRORS as e:
            raise translate_client_error(e, self._bucket, blob_name) from e
        logger.debug(
            "Blob deleted",
            extra={"event": LogEvent.BLOB_DELETED, "bucket": self._bucket, "key": blob_name},
        )

    async def _iter_keys(self, bucket: str) -> AsyncIterator[str]:
        paginator = self._s3.get_paginator("list_objects_v2")
        async for page in paginator.paginate(Bucket=bucket):
            for obj in page.get("Contents", []):
                yield obj["Key"]

    async def list_files(self, container_name: str, ext: str | None = None) -> list[str]:
        """List object keys in a bucket (recursive).

        A missing bucket raises ContainerMissingError rather than listing
        as empty.
        """
        try:
            keys = await collect_listing(self._iter_keys(container_name))
        except S3_ERRORS as e:
            raise translate_client_error(e, container_name) from e

        result = [key for key in keys if matches_extension(key, ext)]
        logger.debug(
            "Listing complete",
            extra={
                "event": LogEvent.LISTING_COMPLETE,
                "bucket": container_name,
                "listed": len(keys),
                "matched": len(result),
            },
        )
        return result

    async def list_containers(self, path: str | None = None) -> list[str]:
        """List buckets. path is not used: buckets are account-wide."""
        try:
            response = await self._s3.list_buckets()
        except S3_ERRORS as e:
            raise translate_client_error(e, "*") from e
        return [bucket["Name"] for bucket in response.get("Buckets", [])]

    async def create_container(self, name: str) -> None:
        params: dict = {"Bucket": name}
        if self._region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}
        try:
            await self._s3.create_bucket(**params)
        except S3_ERRORS as e:
            error = translate_client_error(e, name)
            if isinstance(error, ContainerConflictError):
                logger.info(
                    "Bucket already exists",
                    extra={"event": LogEvent.CONTAINER_EXISTS, "bucket": name},
                )
                return
            raise error from e
        logger.info(
            "Bucket created",
            extra={"event": LogEvent.CONTAINER_CREATED, "bucket": name},
        )

    async def delete_container(self, name: str) -> None:
        try:
            await self._s3.delete_bucket(Bucket=name)
        except Exception as e:
            logger.warning(
                "Failed to delete bucket",
                extra={"event": LogEvent.CONTAINER_DELETE_FAILED, "bucket": name, "error": str(e)},
            )
            return
        logger.info(
            "Bucket deleted",
            extra={"event": LogEvent.CONTAINER_DELETED, "bucket": name},
        )

    async def resolve_url(self, container_name: str, blob_name: str) -> str:
        return await self._presigned_get(container_name, blob_name)
