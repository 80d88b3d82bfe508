"""Blob key and URL normalization helpers."""

import re

# scheme://authority/ prefix of an absolute URL (gs://bucket/, https://host/)
_URL_ROOT_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://[^/]*/?")


def get_file_name(url: str) -> str:
    """Return the last path segment of a URL without its query string.

    >>> get_file_name("https://x/y/z.png?token=abc")
    'z.png'
    """
    return url.split("/")[-1].split("?")[0]


def relative_key(entry: str, container_prefix: str = "") -> str:
    """Normalize a listing entry to a container-relative key.

    Strips an absolute-URL root and then the container prefix, so
    "gs://bucket/images/a.png", "images/a.png" and "a.png" all become
    "a.png" for container_prefix "images".

    Args:
        entry: Key, path or URL returned by a backend listing
        container_prefix: Container name or key prefix to remove
    """
    key = _URL_ROOT_PATTERN.sub("", entry).lstrip("/")
    prefix = container_prefix.strip("/")
    if prefix and key.startswith(f"{prefix}/"):
        key = key[len(prefix) + 1:]
    return key


def matches_extension(name: str, ext: str | None) -> bool:
    """Check an entry against an optional suffix filter."""
    return not ext or name.endswith(ext)
