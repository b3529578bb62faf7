"""
Structured logging for ec2kit.

Every record is one JSON object.  Operation context (region, operation,
instance) and, for failed requests, the EC2 error code are lifted into
top-level keys so a log pipeline can filter on them directly.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from botocore.exceptions import ClientError

CONTEXT_FIELDS = ("request_id", "region", "operation", "instance_id", "error_code")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(
            (key, getattr(record, key))
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class EC2KitLogger:
    """Thin front for the ``ec2kit`` logger that attaches operation context."""

    def __init__(self, name: str = "ec2kit") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(self, level: int, message: str, **context: Any) -> None:
        """Emit *message* with any of :data:`CONTEXT_FIELDS` as extras.

        A ``request_id`` is generated when the caller does not pass one.
        Unknown context keys raise ``TypeError``.
        """
        unknown = set(context) - set(CONTEXT_FIELDS)
        if unknown:
            raise TypeError(f"Unknown log context: {', '.join(sorted(unknown))}")
        context.setdefault("request_id", uuid.uuid4().hex[:12])
        self.logger.log(level, message, extra=context)

    def log_client_error(self, e: ClientError, *, operation: str, **context: Any) -> None:
        """Log a failed EC2 request at ERROR, keyed by its provider error code."""
        code = e.response.get("Error", {}).get("Code", "Unknown")
        self.log_operation(
            logging.ERROR,
            f"{operation} failed: {code}",
            operation=operation,
            error_code=code,
            **context,
        )

    def info(self, message: str, **context: Any) -> None:
        self.log_operation(logging.INFO, message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self.log_operation(logging.DEBUG, message, **context)


# Module-level singleton
ec2_logger = EC2KitLogger()
