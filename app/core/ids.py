# app/core/ids.py
import threading
import time

_lock = threading.Lock()
_last = 0


def next_id() -> str:
    """Millisecond timestamp id, bumped by one when two ids land in the same millisecond."""
    global _last
    with _lock:
        candidate = time.time_ns() // 1_000_000
        if candidate <= _last:
            candidate = _last + 1
        _last = candidate
        return str(candidate)
