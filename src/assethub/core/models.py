"""Value types shared by every storage backend."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class BackendKind(StrEnum):
    """Backend identifiers used to select an adapter."""

    FIREBASE = "firebase"  # Cloud bucket folder (Firebase Storage / GCS)
    MINIO = "minio"  # Self-hosted S3-compatible object storage
    LOCAL_DIR = "local-dir"  # Directory on the local filesystem


class StorageType(StrEnum):
    """Where a backend keeps its data."""

    CLOUD = "cloud"
    LOCAL = "local"


class AssetType(StrEnum):
    """Asset classification result."""

    UNKNOWN = "unknown"
    IMAGE = "image"
    VIDEO = "video"
    TFRECORD = "tfrecord"


class AssetState(StrEnum):
    """Tagging progress of an asset."""

    NOT_VISITED = "not-visited"
    VISITED = "visited"
    TAGGED = "tagged"


class ContainerAddress(BaseModel):
    """A bucket or folder within one backend.

    Names are backend-scoped: two backends may use the same name for
    unrelated containers.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    backend_kind: BackendKind


class StorageProviderOptions(BaseModel):
    """Per-adapter options, captured at construction and never mutated.

    Attributes:
        folder_name: Container the adapter targets.
        create_folder: Create the container in initialize() instead of
            checking that it exists.
        credentials: Backend-specific credentials overriding the configured
            client (access_key/secret_key for MinIO, credentials_file for
            Firebase).
    """

    model_config = ConfigDict(frozen=True)

    folder_name: str = Field(min_length=1)
    create_folder: bool = False
    credentials: dict[str, str] | None = None


class Asset(BaseModel):
    """Typed asset derived from a resolved blob URL."""

    id: str
    type: AssetType
    state: AssetState = AssetState.NOT_VISITED
    name: str
    path: str
    format: str
    size: int | None = None
