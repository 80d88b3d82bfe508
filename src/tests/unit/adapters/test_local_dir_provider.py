"""Tests for LocalDirStorageProvider."""

import pytest

from assethub.adapters.storage.local_dir import LocalDirStorageProvider
from assethub.core.errors import BlobNotFoundError, ContainerMissingError
from assethub.core.models import AssetType, BackendKind, StorageProviderOptions, StorageType


@pytest.fixture
def provider(tmp_path, options) -> LocalDirStorageProvider:
    return LocalDirStorageProvider(options, root=tmp_path)


@pytest.fixture
def images_dir(tmp_path):
    path = tmp_path / "images"
    path.mkdir()
    return path


class TestProperties:
    """Tests for provider identity."""

    def test_kind_and_type(self, provider) -> None:
        assert provider.backend_kind == BackendKind.LOCAL_DIR
        assert provider.storage_type == StorageType.LOCAL


class TestReadWrite:
    """Tests for blob reads and writes."""

    async def test_text_roundtrip(self, provider, images_dir) -> None:
        await provider.write_text("notes.txt", "héllo")

        assert (images_dir / "notes.txt").read_text(encoding="utf-8") == "héllo"
        assert await provider.read_text("notes.txt") == "héllo"

    async def test_binary_is_exact(self, provider, images_dir) -> None:
        (images_dir / "a.png").write_bytes(b"\x89PNG\xff\x00")

        assert await provider.read_binary("a.png") == b"\x89PNG\xff\x00"

    async def test_write_creates_directories(self, provider, tmp_path) -> None:
        await provider.write_binary("sub/a.bin", b"\x01")

        assert (tmp_path / "images" / "sub" / "a.bin").read_bytes() == b"\x01"

    async def test_overwrite(self, provider, images_dir) -> None:
        await provider.write_text("a.txt", "one")
        await provider.write_text("a.txt", "two")

        assert await provider.read_text("a.txt") == "two"

    async def test_read_missing(self, provider, images_dir) -> None:
        with pytest.raises(BlobNotFoundError):
            await provider.read_text("missing.txt")

    async def test_path_traversal_rejected(self, provider, images_dir) -> None:
        with pytest.raises(ValueError):
            await provider.read_text("../../etc/passwd")


class TestDeleteFile:
    """Tests for delete_file."""

    async def test_deletes(self, provider, images_dir) -> None:
        (images_dir / "a.png").write_bytes(b"")

        await provider.delete_file("a.png")

        assert not (images_dir / "a.png").exists()

    async def test_missing_is_success(self, provider, images_dir) -> None:
        await provider.delete_file("missing.png")


class TestListing:
    """Tests for list_files and list_containers."""

    async def test_list_files_sorted_and_filtered(self, provider, images_dir) -> None:
        for name in ("c.png", "a.png", "b.txt"):
            (images_dir / name).write_bytes(b"")
        (images_dir / "nested").mkdir()

        assert await provider.list_files("images") == ["a.png", "b.txt", "c.png"]
        assert await provider.list_files("images", ".png") == ["a.png", "c.png"]

    async def test_missing_directory_lists_empty(self, provider) -> None:
        assert await provider.list_files("nope") == []

    async def test_list_containers(self, provider, tmp_path) -> None:
        (tmp_path / "videos").mkdir()
        (tmp_path / "images").mkdir()
        (tmp_path / "stray.txt").write_bytes(b"")

        assert await provider.list_containers() == ["images", "videos"]


class TestContainers:
    """Tests for container lifecycle."""

    async def test_create_is_idempotent(self, provider, tmp_path) -> None:
        await provider.create_container("uploads")
        await provider.create_container("uploads")

        assert (tmp_path / "uploads").is_dir()

    async def test_delete_container(self, provider, tmp_path) -> None:
        (tmp_path / "uploads").mkdir()
        (tmp_path / "uploads" / "a.png").write_bytes(b"")

        await provider.delete_container("uploads")

        assert not (tmp_path / "uploads").exists()

    async def test_delete_missing_container_is_not_raised(self, provider) -> None:
        await provider.delete_container("nope")


class TestInitialize:
    """Tests for initialize on the filesystem."""

    async def test_missing_directory(self, provider) -> None:
        with pytest.raises(ContainerMissingError):
            await provider.initialize()

    async def test_empty_directory_is_missing(self, provider, images_dir) -> None:
        with pytest.raises(ContainerMissingError):
            await provider.initialize()

    async def test_populated_directory(self, provider, images_dir) -> None:
        (images_dir / "a.png").write_bytes(b"")

        await provider.initialize()

    async def test_create_folder(self, tmp_path) -> None:
        provider = LocalDirStorageProvider(
            StorageProviderOptions(folder_name="fresh", create_folder=True),
            root=tmp_path,
        )

        await provider.initialize()

        assert (tmp_path / "fresh").is_dir()


class TestGetAssets:
    """Tests for get_assets on the filesystem."""

    async def test_assets_use_file_uris(self, provider, images_dir) -> None:
        for name in ("b.mov", "a.jpg", "notes.md"):
            (images_dir / name).write_bytes(b"")

        assets = await provider.get_assets()

        assert [(a.name, a.type) for a in assets] == [("a.jpg", AssetType.IMAGE), ("b.mov", AssetType.VIDEO)]
        assert assets[0].path == (images_dir / "a.jpg").resolve().as_uri()
