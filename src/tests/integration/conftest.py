"""Integration test fixtures.

Needs a live MinIO server. Tests are skipped unless ASSETHUB_S3_ENDPOINT
is set, e.g.:

    ASSETHUB_S3_ENDPOINT=http://localhost:9000 \
    ASSETHUB_S3_ACCESS_KEY=minioadmin ASSETHUB_S3_SECRET_KEY=minioadmin \
    pytest -m integration
"""

import os
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from assethub.adapters import StorageProviderFactory
from assethub.config import AssetHubConfig
from assethub.core.models import BackendKind
from assethub.infra import StorageClients

MINIO_ENDPOINT = os.getenv("ASSETHUB_S3_ENDPOINT")


def pytest_collection_modifyitems(config, items):
    if MINIO_ENDPOINT:
        return
    skip = pytest.mark.skip(reason="ASSETHUB_S3_ENDPOINT not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def test_bucket() -> str:
    """Unique bucket name per test function."""
    return f"assethub-test-{uuid.uuid4().hex[:8]}"


@pytest_asyncio.fixture
async def clients() -> AsyncGenerator[StorageClients, None]:
    async with await StorageClients.open(AssetHubConfig(), [BackendKind.MINIO]) as opened:
        yield opened


@pytest.fixture
def factory(clients: StorageClients) -> StorageProviderFactory:
    return StorageProviderFactory(clients)
