"""Shared utility functions."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import ZULU_DATE_FORMAT, ZULU_DATE_FORMAT_NO_MILLIS


def date_to_wire_string(date: datetime) -> str:
    """Format a datetime as a UTC Zulu string with millisecond precision.

    Naive datetimes are taken to already be in UTC.
    """
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    else:
        date = date.astimezone(timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{date.year:04d}-{date.month:02d}-{date.day:02d}"
        f"T{date.hour:02d}:{date.minute:02d}:{date.second:02d}.{date.microsecond // 1000:03d}Z"
    )


def wire_string_to_date(value: str) -> Optional[datetime]:
    """Parse a Zulu string into an aware UTC datetime, or None if it does not match."""
    if not isinstance(value, str):
        return None

    for fmt in (ZULU_DATE_FORMAT, ZULU_DATE_FORMAT_NO_MILLIS):
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=timezone.utc)
    return None


def format_expiry(expires_at_ms: Optional[int]) -> str:
    """Return a human-readable time until a millisecond epoch expiry."""
    if not expires_at_ms:
        return "[dim]--[/dim]"

    remaining = expires_at_ms / 1000 - datetime.now(timezone.utc).timestamp()
    if remaining <= 0:
        return "[red]expired[/red]"

    total_seconds = int(remaining)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    if hours > 0:
        return f"[green]{hours}h{minutes}m[/green]"
    if minutes >= 10:
        return f"[green]{minutes}m[/green]"
    return f"[yellow]{minutes}m[/yellow]"


def atomic_write_json(path: Path, data: Dict[str, Any], preserve_permissions: bool = True):
    """Atomically write JSON to disk with optional permission preservation."""
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    try:
        os.chmod(path.parent, 0o700)
    except OSError:
        pass  # Best effort

    mode = 0o600
    if preserve_permissions and path.exists():
        try:
            mode = path.stat().st_mode & 0o777
        except OSError:
            pass

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, path)
        os.chmod(path, mode)
    except Exception:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
