"""
Structured logging for instancectl.

Every record is a single-line JSON object. A run binds its context
(project, instance, operation, request id) once with
:meth:`InstanceCtlLogger.bind` and every line it logs carries it, so one
invocation can be followed through a log aggregator.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

CONTEXT_KEYS = ("request_id", "provider", "project", "instance", "operation")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry, default=str)


class BoundLogger:
    """Logger with a fixed invocation context."""

    def __init__(self, logger: logging.Logger, context: dict[str, Any]) -> None:
        self.logger = logger
        self.context = context

    def log(self, level: int, message: str, exc_info: bool = False) -> None:
        self.logger.log(level, message, extra=self.context, exc_info=exc_info)

    def info(self, message: str) -> None:
        self.log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self.log(logging.WARNING, message)

    def error(self, message: str, exc_info: bool = False) -> None:
        self.log(logging.ERROR, message, exc_info=exc_info)

    def debug(self, message: str) -> None:
        self.log(logging.DEBUG, message)


class InstanceCtlLogger:
    """Owns the ``instancectl`` logger and its JSON handler."""

    def __init__(self, name: str = "instancectl") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def set_level(self, level: int | str) -> None:
        self.logger.setLevel(level)

    def bind(
        self,
        *,
        project: str | None = None,
        instance: str | None = None,
        operation: str | None = None,
        provider: str | None = "ovh",
        request_id: str | None = None,
    ) -> BoundLogger:
        """Return a logger that stamps every record with this context.

        Args:
            project: Public Cloud project the run targets.
            instance: Instance name the run targets.
            operation: Requested operation (e.g. 'start').
            provider: Cloud provider name.
            request_id: Correlation ID; auto-generated if omitted.
        """
        return BoundLogger(
            self.logger,
            {
                "provider": provider,
                "project": project,
                "instance": instance,
                "operation": operation,
                "request_id": request_id or uuid.uuid4().hex[:12],
            },
        )


# Module-level singleton
ic_logger = InstanceCtlLogger()
