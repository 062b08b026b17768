"""
Logging Configuration - Structured logging with video context
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional
from contextvars import ContextVar

# Context variables for per-video tracking
current_video_id: ContextVar[Optional[str]] = ContextVar('current_video_id', default=None)
current_operation: ContextVar[Optional[str]] = ContextVar('current_operation', default=None)


class StructuredFormatter(logging.Formatter):
    """
    JSON-structured log formatter with video context.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        operation = current_operation.get()
        video_id = current_video_id.get()

        if operation:
            log_data["operation"] = operation
        if video_id:
            log_data["video_id"] = video_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ContextFormatter(logging.Formatter):
    """Human-readable formatter that appends the video id when one is bound."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        video_id = current_video_id.get()
        if video_id:
            message = f"{message} [video={video_id}]"
        return message


def setup_logging(level: str = "INFO", structured: bool = True):
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        structured: Use JSON format (True) or human-readable (False)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(ContextFormatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        ))

    root_logger.addHandler(handler)


class VideoContext:
    """
    Context manager for binding a video id (and operation) to log records.

    Usage:
        with VideoContext(video_id="abc123", operation="delete"):
            logger.info("Deleting...")  # Will include video_id and operation
    """
    def __init__(self, video_id: Optional[str] = None, operation: Optional[str] = None):
        self.video_id = video_id
        self.operation = operation
        self._tokens = []

    def __enter__(self):
        if self.operation:
            self._tokens.append((current_operation, current_operation.set(self.operation)))
        if self.video_id:
            self._tokens.append((current_video_id, current_video_id.set(self.video_id)))
        return self

    def __exit__(self, *args):
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()
