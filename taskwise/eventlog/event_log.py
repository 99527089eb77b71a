"""Append-only analytics event log for TaskWise.

Each line of the log file is one JSON object: ``{"timestamp": ..., "event": ...,
"taskId": ..., "details": ...}``. The log feeds reports and chat answers only,
so writes are best-effort: a failed append is logged and never raised.
"""

import fcntl
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv

from taskwise.errors import StorageError
from taskwise.models.event import EventLogEntry, EventType

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_EVENT_LOG_PATH = os.getenv("TASKWISE_EVENT_LOG_PATH", "analytics.log")


class EventLog:
    """Line-delimited JSON event log backed by a single file."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or DEFAULT_EVENT_LOG_PATH)

    def append(self, entry: Union[EventLogEntry, Dict[str, Any]]) -> bool:
        """Append one event as a single line.

        The whole line is written with one ``write`` call on an ``O_APPEND``
        descriptor while holding an exclusive ``flock``, so concurrent writers
        (threads or processes) never interleave partial lines.

        Returns:
            True if the line was written, False if the write failed
        """
        payload = entry.to_payload() if isinstance(entry, EventLogEntry) else dict(entry)
        try:
            line = json.dumps({"timestamp": datetime.utcnow().isoformat() + "Z", **payload}, default=str) + "\n"
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize event log entry: {type(e).__name__}: {str(e)}")
            return False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    f.write(line)
                    f.flush()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            return True
        except OSError as e:
            logger.error(f"Failed to write to event log {self.path}: {type(e).__name__}: {str(e)}")
            return False

    def record(self, event: EventType, task_id: str, details: Optional[Dict[str, Any]] = None) -> bool:
        """Append a lifecycle event for a task."""
        return self.append(EventLogEntry(event=event, task_id=task_id, details=details))

    def read_text(self) -> str:
        """Return the raw log content ("" if the file does not exist).

        Undecodable bytes are replaced rather than raised.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        try:
            return self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            logger.debug(f"Event log {self.path} not found; treating as empty")
            return ""
        except OSError as e:
            logger.error(f"Failed to read event log {self.path}: {type(e).__name__}: {str(e)}")
            raise StorageError("Failed to read event log") from e

    def read_entries(self) -> List[Dict[str, Any]]:
        """Parse every line of the log; malformed lines are skipped."""
        entries: List[Dict[str, Any]] = []
        for line in self.read_text().splitlines():
            if not line.strip():
                continue
            try:
                parsed = json.loads(line)
            except json.JSONDecodeError:
                logger.debug(f"Skipping malformed event log line: {line[:100]}")
                continue
            if parsed:
                entries.append(parsed)
        return entries

    def is_empty(self) -> bool:
        return not self.read_text().strip()
