"""HTTP fetching and text decoding for resolved blob URLs.

Presigned and signed URLs are fetched with the shared httpx.AsyncClient.
Payloads are decoded as UTF-8 with invalid sequences replaced, so the
text relay is lossy for content that is not valid UTF-8. Adapters read
binary content natively and keep the relay as a fallback.
"""

import logging

import httpx

from assethub.core.errors import BackendError, BlobNotFoundError, NetworkError
from assethub.core.paths import get_file_name
from assethub.logging_schema import LogEvent

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"


def decode_text(payload: bytes) -> str:
    return payload.decode(TEXT_ENCODING, errors="replace")


def encode_text(text: str) -> bytes:
    return text.encode(TEXT_ENCODING)


async def fetch_payload(http: httpx.AsyncClient, url: str) -> bytes:
    """Fetch the full body of a URL.

    Args:
        http: Shared HTTP client
        url: Resolved (usually time-limited) URL

    Returns:
        Raw response body

    Raises:
        BlobNotFoundError: URL answered 404
        BackendError: Any other HTTP error status
        NetworkError: Transport failure
    """
    try:
        response = await http.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning(
            "Blob fetch failed",
            extra={"event": LogEvent.BLOB_FETCH_FAILED, "file": get_file_name(url), "status": status},
        )
        if status == 404:
            raise BlobNotFoundError(f"Blob not found: {get_file_name(url)}") from e
        raise BackendError(f"Fetching {get_file_name(url)} failed with HTTP {status}", status=status) from e
    except httpx.TransportError as e:
        logger.warning(
            "Blob fetch failed",
            extra={"event": LogEvent.BLOB_FETCH_FAILED, "file": get_file_name(url), "error": str(e)},
        )
        raise NetworkError(f"Fetching {get_file_name(url)} failed: {e}") from e
    return response.content


async def fetch_text(http: httpx.AsyncClient, url: str) -> str:
    """Fetch a URL and decode its body as UTF-8 text."""
    return decode_text(await fetch_payload(http, url))
