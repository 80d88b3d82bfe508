"""Logging configuration for AssetHub.

Supports two formats:
- text: Human-readable for local development
- json: Structured logging for production (log aggregation)

Both render the storage context passed in ``extra`` (event, backend,
container or bucket, key), so a line can be traced to the blob it is about.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger

from assethub.config import LoggingConfig

# SDK loggers that are noisy at INFO (one line per request)
NOISY_LOGGERS = ("httpx", "httpcore", "aiobotocore", "botocore", "google", "urllib3")

# extra fields naming where a storage operation happened, most specific last
CONTEXT_FIELDS = ("backend", "bucket", "container", "folder", "path", "key", "blob")


def _container_of(record: logging.LogRecord) -> str:
    for name in ("container", "bucket", "folder", "path"):
        value = getattr(record, name, None)
        if value:
            return str(value)
    return ""


class RateLimitFilter(logging.Filter):
    """Filter to prevent log storms from repeated messages.

    Listing a large container full of unknown files emits the same skip
    line once per blob. Identical messages are let through once per window
    for each container, so a storm in one container does not hide the
    first line from another.

    Args:
        rate_limit_seconds: Minimum seconds between identical messages (default: 5)
        max_cache_size: Maximum number of messages to track (default: 1000)
    """

    def __init__(
        self,
        rate_limit_seconds: float = 5.0,
        max_cache_size: int = 1000,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._rate_limit = rate_limit_seconds
        self._max_cache = max_cache_size
        self._last_log: dict[str, float] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        # ERROR and above always pass through
        if record.levelno >= logging.ERROR:
            return True

        key = f"{record.name}:{_container_of(record)}:{record.getMessage()}"

        now = time.monotonic()
        last_time = self._last_log.get(key)
        if last_time is not None and now - last_time < self._rate_limit:
            return False
        self._last_log[key] = now

        if len(self._last_log) > self._max_cache:
            oldest_keys = sorted(self._last_log, key=self._last_log.get)[:100]  # type: ignore[arg-type]
            for old_key in oldest_keys:
                del self._last_log[old_key]

        return True


class AssetHubTextFormatter(logging.Formatter):
    """Human-readable lines with the storage context appended.

    Example:
        2024-05-01 12:00:00,000 - assethub.adapters.storage.minio - INFO - Bucket created [container_created bucket=images]
    """

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, "event", None)
        context = [f"{name}={getattr(record, name)}" for name in CONTEXT_FIELDS if getattr(record, name, None)]
        if event:
            context.insert(0, str(event))
        if not context:
            return line
        head, sep, tail = line.partition("\n")
        return f"{head} [{' '.join(context)}]{sep}{tail}"


class AssetHubJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter for log aggregation.

    Adds timestamp (ISO 8601, UTC), level, logger and service. Extra
    fields (event, backend, bucket, container, key, ...) are emitted as
    top-level keys by the base formatter.
    """

    def __init__(self, config: LoggingConfig, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._service = config.service_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self._service

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger from LoggingConfig."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.format == "json":
        formatter = AssetHubJsonFormatter(config)
    else:
        formatter = AssetHubTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RateLimitFilter(rate_limit_seconds=config.rate_limit_seconds))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
