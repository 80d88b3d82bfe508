"""Asset classification from blob URLs and file names."""

import hashlib
from collections.abc import Callable

from assethub.core.models import Asset, AssetType

# Signature adapters expect: (resolved url, file name) -> Asset
AssetClassifier = Callable[[str, str], Asset]

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "tif", "tiff"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mov", "avi", "m4v", "mpg", "wmv"})
TFRECORD_EXTENSIONS = frozenset({"tfrecord"})


class AssetService:
    """Builds Asset records from file paths or URLs."""

    @staticmethod
    def get_asset_type(format: str) -> AssetType:
        """Map a lowercase file extension to an AssetType."""
        if format in IMAGE_EXTENSIONS:
            return AssetType.IMAGE
        if format in VIDEO_EXTENSIONS:
            return AssetType.VIDEO
        if format in TFRECORD_EXTENSIONS:
            return AssetType.TFRECORD
        return AssetType.UNKNOWN

    @staticmethod
    def create_asset_from_file_path(file_path: str, file_name: str | None = None) -> Asset:
        """Create an asset from a local path or URL.

        Args:
            file_path: Path or URL of the file (query strings allowed)
            file_name: Display name; derived from file_path when omitted

        Returns:
            Asset whose type is UNKNOWN when the extension is not recognized
        """
        normalized = file_path.replace("\\", "/")
        name = file_name or normalized.split("/")[-1].split("?")[0]

        stem = name.split("?")[0]
        format = stem.rsplit(".", 1)[-1].lower() if "." in stem else ""

        return Asset(
            id=hashlib.md5(normalized.encode("utf-8")).hexdigest(),
            type=AssetService.get_asset_type(format),
            name=name,
            path=normalized,
            format=format,
        )
