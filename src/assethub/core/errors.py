"""Error handling module for assethub.

This module defines error codes, exception classes, and the detail model
used when errors are logged or reported to callers.

Error Detail Format:
{
    "code": "CONTAINER_MISSING",
    "message": "Container \"images\" does not exist"
}

Usage:
    from assethub.core.errors import BlobNotFoundError, ContainerMissingError

    # Raise with default message
    raise BlobNotFoundError()

    # Raise with custom message
    raise ContainerMissingError("images")
"""

from enum import Enum

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes."""

    CONTAINER_MISSING = "CONTAINER_MISSING"
    BLOB_NOT_FOUND = "BLOB_NOT_FOUND"
    CONTAINER_CONFLICT = "CONTAINER_CONFLICT"
    NETWORK_ERROR = "NETWORK_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"


class ErrorDetail(BaseModel):
    """Error detail containing code and message."""

    code: str
    message: str


class StorageError(Exception):
    """Base exception for assethub.

    All storage specific exceptions inherit from this class so callers can
    handle every backend failure in one place.

    Attributes:
        code: The error code from ErrorCode enum
        message: Human-readable error message
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        """Convert exception to ErrorDetail model."""
        return ErrorDetail(code=self.code.value, message=self.message)


class ContainerMissingError(StorageError):
    """Container listing is empty and creation was not requested."""

    def __init__(self, container_name: str, message: str | None = None) -> None:
        self.container_name = container_name
        super().__init__(
            ErrorCode.CONTAINER_MISSING,
            message or f'Container "{container_name}" does not exist',
        )


class BlobNotFoundError(StorageError):
    """Referenced blob does not exist."""

    def __init__(self, message: str = "Blob not found") -> None:
        super().__init__(ErrorCode.BLOB_NOT_FOUND, message)


class ContainerConflictError(StorageError):
    """Container already exists. Swallowed by create_container."""

    def __init__(self, message: str = "Container already exists") -> None:
        super().__init__(ErrorCode.CONTAINER_CONFLICT, message)


class NetworkError(StorageError):
    """Transport failure talking to the backend."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(ErrorCode.NETWORK_ERROR, message)


class BackendError(StorageError):
    """Opaque failure reported by the backend service."""

    def __init__(self, message: str = "Backend error", status: int | None = None) -> None:
        self.status = status
        super().__init__(ErrorCode.BACKEND_ERROR, message)


# =============================================================================
# S3 (botocore) error translation
# =============================================================================

S3_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})

S3_MISSING_CONTAINER_CODES = frozenset({"NoSuchBucket"})

S3_CONFLICT_CODES = frozenset({
    "BucketAlreadyOwnedByYou",
    "BucketAlreadyExists",
    "409",
})

# Everything the S3 client raises: service errors and transport failures
S3_ERRORS = (ClientError, BotoCoreError)


def translate_client_error(
    exc: ClientError | BotoCoreError,
    bucket: str,
    key: str | None = None,
) -> StorageError:
    """Map a botocore error onto the storage error taxonomy.

    Transport failures (BotoCoreError: connection, timeout, endpoint)
    become NetworkError; ClientError codes map as below.

    Args:
        exc: Error raised by the S3 client
        bucket: Bucket the call targeted
        key: Object key the call targeted, if any

    Returns:
        StorageError subclass to raise in place of exc
    """
    target = f"{bucket}/{key}" if key else bucket
    if isinstance(exc, BotoCoreError):
        return NetworkError(f"S3 request failed for {target}: {exc}")

    error = exc.response.get("Error", {})
    code = str(error.get("Code", ""))
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    if code in S3_MISSING_CONTAINER_CODES:
        return ContainerMissingError(bucket)
    if code in S3_NOT_FOUND_CODES:
        return BlobNotFoundError(f"Blob not found: {target}")
    if code in S3_CONFLICT_CODES or status == 409:
        return ContainerConflictError(f"Container already exists: {bucket}")
    return BackendError(
        f"S3 request failed for {target}: {error.get('Message') or code}",
        status=status,
    )
