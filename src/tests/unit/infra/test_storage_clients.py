"""Tests for StorageClients lifecycle."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from assethub.config import AssetHubConfig, FirebaseConfig
from assethub.core.models import BackendKind
from assethub.infra import clients as clients_module
from assethub.infra.clients import StorageClients


@pytest.fixture
def config() -> AssetHubConfig:
    return AssetHubConfig(
        default_backend=BackendKind.MINIO,
        firebase=FirebaseConfig(bucket="test-app.appspot.com"),
    )


class TestHandles:
    """Tests for client handle access."""

    def test_unopened_s3(self, config) -> None:
        clients = StorageClients(config, httpx.AsyncClient())

        with pytest.raises(RuntimeError, match="MINIO"):
            _ = clients.s3

    def test_unopened_bucket(self, config) -> None:
        clients = StorageClients(config, httpx.AsyncClient())

        with pytest.raises(RuntimeError, match="FIREBASE"):
            _ = clients.bucket


class TestOpen:
    """Tests for StorageClients.open and aclose."""

    async def test_opens_default_backend(self, config, monkeypatch) -> None:
        s3 = MagicMock()
        open_s3 = AsyncMock(return_value=s3)
        open_bucket = MagicMock()
        monkeypatch.setattr(clients_module, "open_s3_client", open_s3)
        monkeypatch.setattr(clients_module, "open_bucket", open_bucket)

        async with await StorageClients.open(config) as clients:
            assert clients.s3 is s3
            assert isinstance(clients.http, httpx.AsyncClient)
            with pytest.raises(RuntimeError):
                _ = clients.bucket

        open_s3.assert_awaited_once()
        open_bucket.assert_not_called()
        assert clients.http.is_closed

    async def test_opens_firebase_bucket(self, config, monkeypatch) -> None:
        bucket = MagicMock()
        monkeypatch.setattr(clients_module, "open_bucket", MagicMock(return_value=bucket))

        clients = await StorageClients.open(config, [BackendKind.FIREBASE])
        assert clients.bucket is bucket

        await clients.aclose()

        bucket.client.close.assert_called_once()
        with pytest.raises(RuntimeError):
            _ = clients.bucket

    async def test_failure_closes_opened_clients(self, config, monkeypatch) -> None:
        monkeypatch.setattr(clients_module, "open_s3_client", AsyncMock(return_value=MagicMock()))
        monkeypatch.setattr(clients_module, "open_bucket", MagicMock(side_effect=ValueError("no bucket")))

        with pytest.raises(ValueError, match="no bucket"):
            await StorageClients.open(config, [BackendKind.MINIO, BackendKind.FIREBASE])


class TestDedicatedClients:
    """Tests for per-credential client caching."""

    async def test_s3_for_is_cached(self, config, monkeypatch) -> None:
        open_s3 = AsyncMock(side_effect=lambda *args, **kwargs: MagicMock())
        monkeypatch.setattr(clients_module, "open_s3_client", open_s3)
        clients = StorageClients(config, httpx.AsyncClient())

        first = await clients.s3_for("ak", "sk")
        second = await clients.s3_for("ak", "sk")
        other = await clients.s3_for("ak2", "sk2")

        assert first is second
        assert other is not first
        assert open_s3.await_count == 2
        assert open_s3.await_args_list[0].kwargs == {"access_key": "ak", "secret_key": "sk"}

    def test_bucket_for_is_cached(self, config, monkeypatch) -> None:
        open_bucket = MagicMock(side_effect=lambda *args: MagicMock())
        monkeypatch.setattr(clients_module, "open_bucket", open_bucket)
        clients = StorageClients(config, httpx.AsyncClient())

        first = clients.bucket_for("/secrets/a.json")
        second = clients.bucket_for("/secrets/a.json")

        assert first is second
        open_bucket.assert_called_once_with(config.firebase, "/secrets/a.json")
