"""AssetHub configuration using pydantic-settings.

Configuration hierarchy:
- S3Config: Self-hosted object storage (MinIO) settings
- FirebaseConfig: Cloud bucket (Firebase / GCS) settings
- LocalDirConfig: Filesystem backend settings
- LoggingConfig: Logging behavior
- AssetHubConfig: Main config aggregating all sub-configs

Environment variable prefix: ASSETHUB_
Example: ASSETHUB_S3_ENDPOINT=http://minio:9000
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from assethub.core.models import BackendKind


class S3Config(BaseSettings):
    """S3-compatible (MinIO) storage configuration."""

    model_config = SettingsConfigDict(env_prefix="ASSETHUB_S3_")

    endpoint: str = Field(default="http://localhost:9000", description="S3 endpoint URL")
    region: str = Field(default="us-east-1", description="S3 region")

    # Credentials - empty defaults force explicit configuration
    access_key: str = Field(default="", description="S3 access key (required)")
    secret_key: str = Field(default="", description="S3 secret key (required)")

    # MinIO's own default lifetime for presigned URLs (7 days)
    presign_expiry_seconds: int = Field(
        default=604800,
        description="Lifetime of presigned GET URLs (seconds)",
    )


class FirebaseConfig(BaseSettings):
    """Firebase Storage configuration.

    Firebase Storage buckets are Google Cloud Storage buckets; folders are
    key prefixes inside the bucket.
    """

    model_config = SettingsConfigDict(env_prefix="ASSETHUB_FIREBASE_")

    bucket: str = Field(default="", description="Storage bucket (e.g. my-app.appspot.com)")
    project: str | None = Field(default=None, description="Google Cloud project ID")
    credentials_file: str | None = Field(
        default=None,
        description="Service account JSON file; application default credentials when unset",
    )
    url_expiry_seconds: int = Field(
        default=3600,
        description="Lifetime of signed download URLs (seconds)",
    )


class LocalDirConfig(BaseSettings):
    """Local filesystem backend configuration."""

    model_config = SettingsConfigDict(env_prefix="ASSETHUB_LOCAL_")

    root: str = Field(default="./data", description="Directory holding one sub-directory per container")


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="ASSETHUB_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(default="assethub", description="Service identifier in logs")
    rate_limit_seconds: float = Field(
        default=5.0,
        description="Minimum seconds between identical non-error log lines",
    )


class AssetHubConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

    Environment variable prefix: ASSETHUB_
    Sub-configs use their own prefixes (ASSETHUB_S3_, ASSETHUB_FIREBASE_, etc.)
    """

    model_config = SettingsConfigDict(
        env_prefix="ASSETHUB_",
        env_nested_delimiter="__",
    )

    default_backend: BackendKind = Field(
        default=BackendKind.MINIO,
        description="Backend used when the caller does not name one",
    )

    # Sub-configurations
    s3: S3Config = Field(default_factory=S3Config)
    firebase: FirebaseConfig = Field(default_factory=FirebaseConfig)
    local: LocalDirConfig = Field(default_factory=LocalDirConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_config() -> AssetHubConfig:
    """Get cached configuration singleton."""
    return AssetHubConfig()
