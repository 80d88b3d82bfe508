"""Infrastructure layer: backend client handles and HTTP fetching."""

from assethub.infra.clients import StorageClients
from assethub.infra.gcs import open_bucket
from assethub.infra.http import decode_text, encode_text, fetch_payload, fetch_text
from assethub.infra.s3 import open_s3_client

__all__ = [
    # Clients
    "StorageClients",
    "open_bucket",
    "open_s3_client",
    # HTTP
    "fetch_payload",
    "fetch_text",
    "decode_text",
    "encode_text",
]
