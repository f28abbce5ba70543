"""
construction_tracker.ids

Timestamp-based identifiers and clock helpers.

Responsibilities:
- Generate string ids from the current time in milliseconds.
- Keep generated ids strictly increasing within the process, so two records
  created in the same millisecond never share an id.
"""

from __future__ import annotations

import threading
import time

_lock = threading.Lock()
_last_id = 0


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_id() -> str:
    global _last_id
    with _lock:
        candidate = now_ms()
        # Same (or earlier, after a clock step back) millisecond: bump past the last id.
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


# --- Module Notes -----------------------------------------------------------
# Ids from another process (or an older build) can still collide with ours;
# the stores resolve that as last-write-wins on the primary key.
