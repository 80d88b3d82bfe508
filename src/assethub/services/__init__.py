"""Application services."""

from assethub.services.assets import AssetClassifier, AssetService

__all__ = ["AssetClassifier", "AssetService"]
