"""Backend client handles shared by all adapters.

Clients are opened once at application start and closed at shutdown:

    async with await StorageClients.open(get_config()) as clients:
        factory = StorageProviderFactory(clients)
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import AsyncExitStack
from types import TracebackType
from typing import TYPE_CHECKING

import httpx
from aiobotocore.session import AioSession, get_session
from google.cloud import storage

from assethub.config import AssetHubConfig
from assethub.core.models import BackendKind
from assethub.infra.gcs import open_bucket
from assethub.infra.s3 import open_s3_client
from assethub.logging_schema import LogEvent

if TYPE_CHECKING:
    from types_aiobotocore_s3 import S3Client

logger = logging.getLogger(__name__)


class StorageClients:
    """Owns the HTTP client and the backend SDK clients.

    Adapters receive these handles at construction and never create or
    close clients themselves.
    """

    def __init__(
        self,
        config: AssetHubConfig,
        http: httpx.AsyncClient,
        s3: S3Client | None = None,
        bucket: storage.Bucket | None = None,
        session: AioSession | None = None,
        stack: AsyncExitStack | None = None,
    ) -> None:
        self.config = config
        self.http = http
        self._s3 = s3
        self._bucket = bucket
        self._session = session
        self._stack = stack or AsyncExitStack()
        # Dedicated clients for adapters with their own credentials
        self._s3_by_key: dict[tuple[str, str], S3Client] = {}
        self._buckets_by_file: dict[str, storage.Bucket] = {}

    @classmethod
    async def open(
        cls,
        config: AssetHubConfig,
        backends: Iterable[BackendKind] | None = None,
    ) -> StorageClients:
        """Open clients for the given backends (default backend when omitted)."""
        backends = set(backends or (config.default_backend,))
        stack = AsyncExitStack()
        try:
            http = await stack.enter_async_context(httpx.AsyncClient())
            session = get_session()

            s3 = None
            if BackendKind.MINIO in backends:
                s3 = await open_s3_client(stack, config.s3, session)

            bucket = None
            if BackendKind.FIREBASE in backends:
                bucket = open_bucket(config.firebase)
                stack.callback(bucket.client.close)
        except Exception as e:
            logger.error(
                "Failed to open storage clients",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            await stack.aclose()
            raise

        logger.info(
            "Storage clients opened",
            extra={"event": LogEvent.CLIENTS_OPENED, "backends": sorted(backends)},
        )
        return cls(config, http, s3=s3, bucket=bucket, session=session, stack=stack)

    @property
    def s3(self) -> S3Client:
        if self._s3 is None:
            raise RuntimeError("S3 client not opened. Include BackendKind.MINIO when opening clients.")
        return self._s3

    @property
    def bucket(self) -> storage.Bucket:
        if self._bucket is None:
            raise RuntimeError("Firebase bucket not opened. Include BackendKind.FIREBASE when opening clients.")
        return self._bucket

    async def s3_for(self, access_key: str, secret_key: str) -> S3Client:
        """Get (or open) an S3 client using specific credentials."""
        key = (access_key, secret_key)
        if key not in self._s3_by_key:
            self._s3_by_key[key] = await open_s3_client(
                self._stack,
                self.config.s3,
                self._session,
                access_key=access_key,
                secret_key=secret_key,
            )
        return self._s3_by_key[key]

    def bucket_for(self, credentials_file: str) -> storage.Bucket:
        """Get (or create) a bucket handle using a specific credentials file."""
        if credentials_file not in self._buckets_by_file:
            bucket = open_bucket(self.config.firebase, credentials_file)
            self._stack.callback(bucket.client.close)
            self._buckets_by_file[credentials_file] = bucket
        return self._buckets_by_file[credentials_file]

    async def aclose(self) -> None:
        await self._stack.aclose()
        self._s3 = None
        self._bucket = None
        self._s3_by_key.clear()
        self._buckets_by_file.clear()
        logger.info("Storage clients closed", extra={"event": LogEvent.CLIENTS_CLOSED})

    async def __aenter__(self) -> StorageClients:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
