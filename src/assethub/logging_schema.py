"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for AssetHub.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.CONTAINER_CREATED, ...})
    """

    # Client lifecycle
    CLIENTS_OPENED = "clients_opened"
    CLIENTS_CLOSED = "clients_closed"

    # Provider lifecycle
    PROVIDER_CREATED = "provider_created"
    PROVIDER_INITIALIZED = "provider_initialized"
    CONTAINER_MISSING = "container_missing"

    # Container events
    CONTAINER_CREATED = "container_created"
    CONTAINER_EXISTS = "container_exists"
    CONTAINER_DELETED = "container_deleted"
    CONTAINER_DELETE_FAILED = "container_delete_failed"

    # Blob events
    BLOB_WRITTEN = "blob_written"
    BLOB_DELETED = "blob_deleted"
    BLOB_FETCH_FAILED = "blob_fetch_failed"

    # Listing events
    LISTING_COMPLETE = "listing_complete"
    ASSETS_RESOLVED = "assets_resolved"
    ASSET_SKIPPED = "asset_skipped"
