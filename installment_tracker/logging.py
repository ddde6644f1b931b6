"""Logging setup for installment-tracker.

Records about a user's document or one loan week may carry context passed
with ``extra=``::

    logger.info("Recorded payment", extra={"week": "2024-01-08", "amount": "25000"})

The JSON formatter emits those attributes as top-level fields; the standard
formatter appends them as ``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

CONTEXT_FIELDS = ("user_id", "week", "amount", "status")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Get the context fields set on a record, in ``CONTEXT_FIELDS`` order."""
    return {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Configure logging for installment-tracker.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown names
        fall back to INFO.
    format_type : str
        "standard" or "json".
    stream : IO[str] | None
        Destination, defaults to stdout.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_type == "json" else ContextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("installment_tracker").setLevel(log_level)
    # Library loggers stay at WARNING
    logging.getLogger("psycopg").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Pipe-separated text with the record's context appended."""

    def __init__(self) -> None:
        super().__init__(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = record_context(record)
        if not context:
            return text
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = text.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(record_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
