"""JSON lines journal for evaluated signals and rejections.

Records land in logs/{family}_{date}.jsonl:
- signals: accepted trade proposals
- rejections: passes that ended without a signal
- fills: close notifications fed back into the loss streak

Append-only audit trail. Nothing here is read back by the engine.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from core.config import settings


def get_logs_dir() -> Path:
    return Path(settings.logs_dir)


def utc_date_str(ts: datetime = None) -> str:
    """Return YYYY-MM-DD in UTC."""
    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        # Assume naive datetime is UTC
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.strftime("%Y-%m-%d")


def utc_iso_str(ts: datetime = None) -> str:
    """Return ISO 8601 timestamp with Z suffix."""
    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def millis_to_datetime(ms: int) -> datetime:
    """Convert epoch millis from the tick feed to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def log_path(family: str, ts: datetime = None, logs_dir: Optional[Path] = None) -> Path:
    """Return path for logs/{family}_{date}.jsonl."""
    date_str = utc_date_str(ts)
    return (logs_dir or get_logs_dir()) / f"{family}_{date_str}.jsonl"


def append_jsonl(path: Path, record: dict):
    """Append a JSON record as a single line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    line = json.dumps(record, separators=(",", ":"), default=str) + "\n"
    with open(path, "a") as f:
        f.write(line)


def log_signal(record: dict, ts: datetime = None, logs_dir: Optional[Path] = None):
    """Log accepted trade proposal."""
    append_jsonl(log_path("signals", ts, logs_dir), record)


def log_rejection(record: dict, ts: datetime = None, logs_dir: Optional[Path] = None):
    """Log evaluation pass that produced no signal."""
    append_jsonl(log_path("rejections", ts, logs_dir), record)


def log_fill(record: dict, ts: datetime = None, logs_dir: Optional[Path] = None):
    """Log close notification (win/loss) routed to the loss streak."""
    append_jsonl(log_path("fills", ts, logs_dir), record)
