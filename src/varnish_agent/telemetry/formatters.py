"""Log formatters for console and JSONL output."""

from __future__ import annotations

__all__ = ["ConsoleFormatter", "ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


class ISO8601Formatter(logging.Formatter):
    """JSONL formatter with ISO 8601 timestamps (UTC).

    Format: YYYY-MM-DDTHH:MM:SS.sssZ
    Example: 2026-03-04T10:48:37.123Z
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as one JSON line with the timestamp first.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log entry.
        """
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        if isinstance(record.msg, dict):
            log_data = record.msg
        else:
            log_data = {"message": record.getMessage()}

        log_entry = {"time": timestamp, "level": record.levelname, **log_data}
        return json.dumps(log_entry, default=str)
