"""Append-only JSONL provenance log for audit runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path


def log_event(log_path: Path, event: str, payload: dict | None = None) -> dict:
    """Append an event to the JSONL log at *log_path* and return it."""

    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "payload": payload or {},
    }
    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
    return entry


def read_events(log_path: Path) -> list[dict]:
    log_path = Path(log_path)
    if not log_path.exists():
        return []
    with log_path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


__all__ = ["log_event", "read_events"]
