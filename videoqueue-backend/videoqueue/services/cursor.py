"""
Discovery watermark persisted as a small JSON file.

Kept outside the queue database so the watermark can be reset without
touching queued videos (and vice versa).
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone

from videoqueue.core.errors import CursorSaveError

logger = logging.getLogger(__name__)

# Returned when no watermark has ever been saved
ZERO_CURSOR = datetime.min.replace(tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CursorStore:
    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    def load(self) -> datetime:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return as_utc(datetime.fromisoformat(data["lastCreatedAt"]))
        except FileNotFoundError:
            return ZERO_CURSOR
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Unreadable cursor file {self.path}, starting from zero: {e}")
            return ZERO_CURSOR

    def save(self, value: datetime) -> None:
        payload = json.dumps({"lastCreatedAt": as_utc(value).isoformat()})
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".cursor-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, self.path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise CursorSaveError(f"Failed to save cursor to {self.path}: {e}") from e
        logger.debug(f"Cursor saved: {payload}")

    def reset(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise CursorSaveError(f"Failed to reset cursor {self.path}: {e}") from e
        logger.info(f"Cursor reset: {self.path}")
