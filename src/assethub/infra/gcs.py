"""Google Cloud Storage bucket handles for the Firebase backend."""

import logging

from google.cloud import storage

from assethub.config import FirebaseConfig

logger = logging.getLogger(__name__)


def open_bucket(config: FirebaseConfig, credentials_file: str | None = None) -> storage.Bucket:
    """Create a bucket handle for the configured Firebase Storage bucket.

    Signed URLs need service account credentials, so a credentials file is
    the normal setup; application default credentials are used otherwise.

    Args:
        config: Bucket, project and default credentials file
        credentials_file: Overrides config.credentials_file

    Raises:
        ValueError: No bucket configured
    """
    if not config.bucket:
        raise ValueError("Firebase bucket is not configured (ASSETHUB_FIREBASE_BUCKET)")

    credentials_file = credentials_file or config.credentials_file
    if credentials_file:
        client = storage.Client.from_service_account_json(credentials_file, project=config.project)
    else:
        client = storage.Client(project=config.project)

    logger.debug("GCS bucket handle created", extra={"bucket": config.bucket})
    return client.bucket(config.bucket)
