"""Fixtures for AssetHub unit tests."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from assethub.core.models import StorageProviderOptions


class FakePaginator:
    """Stand-in for an aiobotocore paginator.

    paginate() returns an async iterator over the given pages and raises
    error after the last page when one is set.
    """

    def __init__(self, pages: list[dict], error: Exception | None = None) -> None:
        self._pages = pages
        self._error = error
        self.calls: list[dict] = []

    def paginate(self, **kwargs):
        self.calls.append(kwargs)
        return self._iterate()

    async def _iterate(self):
        for page in self._pages:
            yield page
        if self._error is not None:
            raise self._error


def make_gcs_blob(name: str) -> MagicMock:
    """Mock google.cloud.storage.Blob with a signed URL derived from its name."""
    blob = MagicMock()
    blob.name = name
    blob.generate_signed_url.return_value = (
        f"https://storage.googleapis.com/test-app.appspot.com/{name}?X-Goog-Signature=abc"
    )
    blob.download_as_bytes.return_value = b""
    return blob


@pytest.fixture
def options() -> StorageProviderOptions:
    """Options targeting an existing container."""
    return StorageProviderOptions(folder_name="images")


@pytest.fixture
def mock_s3() -> MagicMock:
    """Mock aiobotocore S3 client.

    get_paginator is synchronous on the real client, everything else is
    awaited.
    """
    s3 = MagicMock()
    s3.generate_presigned_url = AsyncMock(
        side_effect=lambda method, Params, ExpiresIn: (
            f"http://minio:9000/{Params['Bucket']}/{Params['Key']}?X-Amz-Signature=abc"
        )
    )
    s3.get_object = AsyncMock()
    s3.put_object = AsyncMock(return_value={"ETag": '"etag"'})
    s3.delete_object = AsyncMock(return_value={})
    s3.list_buckets = AsyncMock(return_value={"Buckets": []})
    s3.create_bucket = AsyncMock(return_value={})
    s3.delete_bucket = AsyncMock(return_value={})
    s3.get_paginator.return_value = FakePaginator([])
    return s3


@pytest.fixture
def mock_bucket() -> MagicMock:
    """Mock google.cloud.storage.Bucket handing out mock blobs."""
    bucket = MagicMock()
    bucket.name = "test-app.appspot.com"
    bucket.blob.side_effect = make_gcs_blob
    bucket.list_blobs.side_effect = lambda **kwargs: iter([])
    return bucket


@pytest.fixture
def http_routes() -> dict[str, bytes]:
    """URL (without query) -> body served with 200 by the mock HTTP client."""
    return {}


@pytest.fixture
def http_client(http_routes: dict[str, bytes]) -> httpx.AsyncClient:
    """httpx client answering from http_routes, 404 otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url).split("?")[0]
        if url in http_routes:
            return httpx.Response(200, content=http_routes[url])
        return httpx.Response(404)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def paginator_factory() -> Callable[..., FakePaginator]:
    return FakePaginator


@pytest.fixture
def make_blob() -> Callable[[str], MagicMock]:
    return make_gcs_blob
