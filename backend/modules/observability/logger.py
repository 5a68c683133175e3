"""
Structured JSON logger: append-only, one object per line (.jsonl).

Usage:
    from modules.observability.logger import StructuredLogger

    logger = StructuredLogger()
    logger.log("default", "PLAN_GENERATED", {"city": "Paris", "days": 5})

Logs are written to  <LOGS_DIR>/<session_id>.jsonl  (see config.LOGS_DIR).
Set STRUCTURED_LOG_ENABLED=false to turn every call into a no-op.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime, timezone
from pathlib import Path

import config


class StructuredLogger:
    """Thread-safe, append-only JSONL logger."""

    def __init__(
        self,
        logs_dir: Path | str | None = None,
        enabled: bool | None = None,
    ) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else Path(config.LOGS_DIR)
        self.enabled = config.STRUCTURED_LOG_ENABLED if enabled is None else enabled
        self._lock = threading.Lock()
        self._handles: dict[str, object] = {}  # session_id -> file handle

    # ── public API ────────────────────────────────────────────────────────

    def log(self, session_id: str, event_type: str, payload: dict) -> None:
        """Append one structured JSON record to ``<session_id>.jsonl``."""
        if not self.enabled:
            return
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "session_id": session_id,
            "event_type": event_type,
            "payload": payload,
        }
        line = json.dumps(record, default=str, ensure_ascii=False) + "\n"

        with self._lock:
            fh = self._handles.get(session_id)
            if fh is None:
                fh = self._open(session_id)
            fh.write(line)  # type: ignore[union-attr]
            fh.flush()  # type: ignore[union-attr]

    def read(self, session_id: str, event_type: str | None = None) -> list[dict]:
        """Return recorded events for a session, optionally filtered by type."""
        path = self._logs_dir / f"{session_id}.jsonl"
        if not path.exists():
            return []
        records: list[dict] = []
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                rec = json.loads(line)
                if event_type is None or rec.get("event_type") == event_type:
                    records.append(rec)
        return records

    def close(self, session_id: str | None = None) -> None:
        """Close one or all open file handles."""
        with self._lock:
            if session_id:
                fh = self._handles.pop(session_id, None)
                if fh:
                    fh.close()  # type: ignore[union-attr]
            else:
                for fh in self._handles.values():
                    fh.close()  # type: ignore[union-attr]
                self._handles.clear()

    # ── internals ─────────────────────────────────────────────────────────

    def _open(self, session_id: str):  # noqa: ANN202
        os.makedirs(self._logs_dir, exist_ok=True)
        path = self._logs_dir / f"{session_id}.jsonl"
        fh = open(path, "a", encoding="utf-8")  # noqa: SIM115
        self._handles[session_id] = fh
        return fh
