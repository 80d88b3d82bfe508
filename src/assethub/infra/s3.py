"""S3 client handles for the self-hosted object storage backend."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING

from aiobotocore.session import AioSession, get_session

from assethub.config import S3Config

if TYPE_CHECKING:
    from types_aiobotocore_s3 import S3Client

logger = logging.getLogger(__name__)


async def open_s3_client(
    stack: AsyncExitStack,
    config: S3Config,
    session: AioSession | None = None,
    access_key: str | None = None,
    secret_key: str | None = None,
) -> S3Client:
    """Open an S3 client whose lifetime is bound to stack.

    Args:
        stack: Exit stack that closes the client
        config: Endpoint, region and default credentials
        session: Session to reuse for connection pooling
        access_key: Overrides config.access_key
        secret_key: Overrides config.secret_key
    """
    session = session or get_session()
    client = await stack.enter_async_context(
        session.create_client(
            "s3",
            endpoint_url=config.endpoint,
            aws_access_key_id=access_key or config.access_key,
            aws_secret_access_key=secret_key or config.secret_key,
            region_name=config.region,
        )
    )
    logger.debug("S3 client opened", extra={"endpoint": config.endpoint})
    return client
