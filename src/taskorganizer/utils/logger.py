"""JSON-lines event log for task mutations and store anomalies."""

from __future__ import annotations

import json
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Deque, Dict, Optional


class EventLogger:
    """Appends one JSON object per event to a log file.

    With ``log_file=None`` nothing is written to disk; the latest entries are
    still kept in ``recent``.
    """

    def __init__(self, log_file: Optional[Path] = None, keep_recent: int = 50) -> None:
        self.log_file = Path(log_file).expanduser() if log_file else None
        self.recent: Deque[Dict[str, Any]] = deque(maxlen=keep_recent)

    def _write(self, payload: Dict[str, Any]) -> None:
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        self.recent.append(entry)
        if not self.log_file:
            return
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError:
            # Losing a log line must never break a task operation.
            pass

    def events(self) -> list[str]:
        """Event names seen recently, oldest first."""
        return [entry["event"] for entry in self.recent]

    def log_task_created(self, task_id: int, text: str) -> None:
        self._write({"event": "task_created", "task_id": task_id, "text": text})

    def log_task_renamed(self, task_id: int, text: str) -> None:
        self._write({"event": "task_renamed", "task_id": task_id, "text": text})

    def log_task_toggled(self, task_id: int, completed: bool) -> None:
        self._write({"event": "task_toggled", "task_id": task_id, "completed": completed})

    def log_task_deleted(self, task_id: int) -> None:
        self._write({"event": "task_deleted", "task_id": task_id})

    def log_store_loaded(self, count: int) -> None:
        self._write({"event": "store_loaded", "count": count})

    def log_store_read_failed(self, reason: str, raw: Optional[str] = None) -> None:
        payload: Dict[str, Any] = {"event": "store_read_failed", "reason": reason}
        if raw is not None:
            payload["raw"] = raw[:200]
        self._write(payload)

    def log_store_write_failed(self, reason: str) -> None:
        self._write({"event": "store_write_failed", "reason": reason})
